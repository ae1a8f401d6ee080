"""
Request Logging Middleware

Pure ASGI middleware that logs one line per API request with its status code
and response time.
"""

import time
import logging

from medikey.core.config import settings

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 2000


class RequestLoggingMiddleware:
    """Log `METHOD path status in Nms` for every HTTP request under the API prefix"""

    def __init__(self, app, prefix: str = settings.API_PREFIX):
        self.app = app
        self.prefix = prefix

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not scope["path"].startswith(self.prefix):
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            response_time_ms = (time.time() - start_time) * 1000
            line = f"{scope['method']} {scope['path']} {status_code} in {response_time_ms:.0f}ms"
            if response_time_ms > SLOW_REQUEST_MS:
                logger.warning(f"Slow request: {line}")
            else:
                logger.info(line)
