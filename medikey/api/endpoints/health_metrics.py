from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.services.health_analytics import TimeRange, build_analytics, window_start

router = APIRouter()


@router.get("/", response_model=schemas.HealthAnalytics)
def read_health_analytics(
    db: Session = Depends(deps.get_db),
    time_range: TimeRange = Query(TimeRange.THREE_MONTHS, alias="timeRange"),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Chart series for blood pressure, blood sugar, weight and heart rate inside the selected window.
    """
    rows = crud.health_metric.get_in_window(db, user_id=current_user.id, since=window_start(time_range))
    height = crud.health_metric.latest_of_type(db, user_id=current_user.id, metric_type="height")
    return build_analytics(rows, time_range, height_metric=height)


@router.get("/entries", response_model=List[schemas.HealthMetric])
def read_metric_entries(
    db: Session = Depends(deps.get_db),
    metric_type: Optional[str] = Query(None, alias="metricType"),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.health_metric.get_by_user(db, user_id=current_user.id, metric_type=metric_type)


@router.post("/", response_model=schemas.HealthMetric, status_code=status.HTTP_201_CREATED)
def create_metric(
    *,
    db: Session = Depends(deps.get_db),
    metric_in: schemas.HealthMetricCreate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.health_metric.create_with_owner(db, obj_in=metric_in, user_id=current_user.id)


@router.delete("/{metric_id}", response_model=schemas.Message)
def delete_metric(
    *,
    db: Session = Depends(deps.get_db),
    metric_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    metric = deps.ensure_owner(crud.health_metric.get(db, id=metric_id), current_user, "Health metric")
    crud.health_metric.remove(db, db_obj=metric)
    return {"message": "Health metric deleted successfully"}
