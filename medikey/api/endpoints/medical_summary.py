import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.services import health_context
from medikey.utils import openai_client

logger = logging.getLogger(__name__)

router = APIRouter()

# One reading per type is enough for the overview
SUMMARY_METRIC_TYPES = ("blood_pressure", "blood_sugar", "weight", "heart_rate", "height")


@router.get("/", response_model=schemas.MedicalSummaryResponse)
async def read_medical_summary(
    db: Session = Depends(deps.get_db),
    refresh: bool = False,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    AI overview of the user's health history.

    The cached summary is reused until a record is added after it was
    generated, or `refresh=true` is passed.
    """
    records = crud.medical_record.get_by_user(db, user_id=current_user.id)
    if not records:
        return {"summary": None, "last_updated": None}

    cached = crud.medical_summary.get_by_user(db, user_id=current_user.id)
    newest_record = crud.medical_record.latest_created_at(db, user_id=current_user.id)
    if (
        cached is not None
        and cached.summary
        and not refresh
        and (newest_record is None or newest_record <= cached.last_updated)
    ):
        return cached

    latest_metrics = []
    for metric_type in SUMMARY_METRIC_TYPES:
        metric = crud.health_metric.latest_of_type(db, user_id=current_user.id, metric_type=metric_type)
        if metric is not None:
            latest_metrics.append(metric)

    context = {
        "user": health_context.user_profile(current_user),
        "recentRecords": health_context.record_digest(records[: health_context.SUMMARY_RECORD_LIMIT]),
        "latestMetrics": health_context.metric_digest(latest_metrics),
    }
    try:
        summary = await openai_client.generate_health_summary(context)
    except openai_client.AIServiceError as e:
        logger.warning(f"Medical summary for user {current_user.id} not regenerated: {e}")
        if cached is not None and cached.summary:
            return cached
        return {"summary": e.message, "last_updated": None}
    logger.info(f"Regenerated medical summary for user {current_user.id}")
    return crud.medical_summary.upsert(db, user_id=current_user.id, summary=summary)
