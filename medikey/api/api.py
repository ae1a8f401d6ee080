from fastapi import APIRouter

from medikey.api.endpoints import auth
from medikey.api.endpoints import users
from medikey.api.endpoints import records
from medikey.api.endpoints import health_metrics
from medikey.api.endpoints import appointments
from medikey.api.endpoints import family_members
from medikey.api.endpoints import ai_chat
from medikey.api.endpoints import medical_summary
from medikey.api.endpoints import emergency
from medikey.api.endpoints import smartwatch
from medikey.api.endpoints import health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(health_metrics.router, prefix="/health-metrics", tags=["health-metrics"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(family_members.router, prefix="/family-members", tags=["family-members"])
api_router.include_router(ai_chat.router, prefix="/ai-chat", tags=["ai-chat"])
api_router.include_router(medical_summary.router, prefix="/medical-summary", tags=["medical-summary"])
api_router.include_router(emergency.router, prefix="/emergency", tags=["emergency"])
api_router.include_router(smartwatch.router, prefix="/smartwatch", tags=["smartwatch"])
