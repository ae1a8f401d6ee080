from typing import Any

from fastapi import APIRouter

from medikey.core.config import settings
from medikey.core.database_utils import check_database_health

router = APIRouter()


@router.get("")
def health_check() -> Any:
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": settings.VERSION,
        "database": "healthy" if check_database_health() else "unhealthy",
    }
