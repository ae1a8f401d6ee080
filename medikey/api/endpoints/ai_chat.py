import logging
from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.services import health_context
from medikey.utils import openai_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/history", response_model=List[schemas.AiChat])
def read_chat_history(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.ai_chat.get_history(db, user_id=current_user.id)


@router.post("/", response_model=schemas.AiChat)
async def send_chat_message(
    *,
    db: Session = Depends(deps.get_db),
    chat_in: schemas.ChatRequest,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Ask the assistant a question. The answer is generated from the user's
    profile, records, latest metrics and upcoming appointments, then stored.
    """
    records = crud.medical_record.get_by_user(db, user_id=current_user.id)
    metrics = crud.health_metric.get_by_user(
        db, user_id=current_user.id, limit=health_context.CHAT_METRIC_LIMIT
    )
    appointments = crud.appointment.get_upcoming(db, user_id=current_user.id)

    response = await openai_client.generate_health_response(
        chat_in.message,
        health_context.user_profile(current_user),
        health_context.record_digest(records),
        health_context.metric_digest(metrics),
        appointments=health_context.appointment_digest(appointments),
    )
    chat = crud.ai_chat.create_entry(
        db, user_id=current_user.id, message=chat_in.message, response=response
    )
    logger.info(f"Stored AI chat {chat.id} for user {current_user.id}")
    return chat
