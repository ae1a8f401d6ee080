from typing import Optional
from datetime import datetime
from pydantic import Field
from medikey.schemas.base import ApiModel


class ChatRequest(ApiModel):
    message: str = Field(..., min_length=1)


class AiChat(ApiModel):
    id: int
    user_id: int
    message: str
    response: str
    created_at: Optional[datetime] = None


class MedicalSummaryResponse(ApiModel):
    summary: Optional[str] = None
    last_updated: Optional[datetime] = None
