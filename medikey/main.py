from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from medikey.core.config import settings
from medikey.core.database_utils import get_db_session
from medikey.db.init_db import init_db
from medikey.middleware.request_logging import RequestLoggingMiddleware

# Configure logging
handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up MediKey Backend ({settings.ENVIRONMENT.value})...")
    with get_db_session() as db:
        init_db(db)
    if settings.ai_enabled:
        logger.info(f"AI assistant enabled with model {settings.OPENAI_MODEL}")
    else:
        logger.info("AI assistant running in fallback mode")

    yield

    logger.info("MediKey Backend shutdown complete")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
    else:
        logger.info(f"HTTP {exc.status_code}: {exc.detail} - {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"HTTP 422: invalid request - {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "error": True,
            "message": "Invalid request",
            "status_code": 422,
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions"""
    logger.exception(f"Unhandled exception: {exc} - {request.url}")
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": 500,
        },
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="MediKey - Personal Health Records, Analytics and AI Assistant",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured with origins: {settings.CORS_ORIGINS}")

    # GZip Middleware for response compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Import routes after middleware setup
    from medikey.api.api import api_router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint that redirects to API documentation"""
        return RedirectResponse(url=f"{settings.API_PREFIX}/docs")

    return app


# Create the FastAPI app instance
app = create_application()


if __name__ == "__main__":
    uvicorn.run(
        "medikey.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
