from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.health_metric import HealthMetric
from medikey.schemas.health_metric import HealthMetricCreate
from medikey.utils.timezone import utcnow, to_utc_naive


class CRUDHealthMetric(CRUDBase[HealthMetric, HealthMetricCreate, HealthMetricCreate]):
    def create_with_owner(self, db: Session, *, obj_in: HealthMetricCreate, user_id: int) -> HealthMetric:
        data = obj_in.model_dump()
        data["recorded_at"] = to_utc_naive(data.get("recorded_at")) or utcnow()
        db_obj = HealthMetric(**data, user_id=user_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_user(
        self, db: Session, *, user_id: int, metric_type: Optional[str] = None, limit: Optional[int] = None
    ) -> List[HealthMetric]:
        """Newest first"""
        query = db.query(HealthMetric).filter(HealthMetric.user_id == user_id)
        if metric_type:
            query = query.filter(HealthMetric.metric_type == metric_type)
        query = query.order_by(HealthMetric.recorded_at.desc(), HealthMetric.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_in_window(
        self, db: Session, *, user_id: int, since: Optional[datetime] = None
    ) -> List[HealthMetric]:
        """Oldest first, optionally bounded below by `since`"""
        query = db.query(HealthMetric).filter(HealthMetric.user_id == user_id)
        if since is not None:
            query = query.filter(HealthMetric.recorded_at >= since)
        return query.order_by(HealthMetric.recorded_at.asc(), HealthMetric.id.asc()).all()

    def latest_of_type(self, db: Session, *, user_id: int, metric_type: str) -> Optional[HealthMetric]:
        return (
            db.query(HealthMetric)
            .filter(HealthMetric.user_id == user_id, HealthMetric.metric_type == metric_type)
            .order_by(HealthMetric.recorded_at.desc(), HealthMetric.id.desc())
            .first()
        )


health_metric = CRUDHealthMetric(HealthMetric)
