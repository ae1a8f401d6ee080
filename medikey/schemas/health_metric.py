import json
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import Field, field_validator
from medikey.schemas.base import ApiModel


def serialize_metric_value(value: Any) -> str:
    """Scalars are stored as text, objects and lists as JSON text"""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


# Shared properties
class HealthMetricBase(ApiModel):
    metric_type: str = Field(..., min_length=1)
    value: str
    unit: str = ""
    notes: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def normalize_value(cls, v: Any) -> str:
        if v is None:
            raise ValueError("value is required")
        return serialize_metric_value(v)


# Properties to receive on metric creation
class HealthMetricCreate(HealthMetricBase):
    recorded_at: Optional[datetime] = None


# Properties to return to client
class HealthMetric(HealthMetricBase):
    id: int
    user_id: int
    recorded_at: datetime
    created_at: Optional[datetime] = None


class MetricSeries(ApiModel):
    latest: Optional[str] = None
    change: Optional[float] = None
    data: List[Dict[str, Any]] = Field(default_factory=list)


class HealthAnalytics(ApiModel):
    time_range: str
    blood_pressure: MetricSeries
    blood_sugar: MetricSeries
    weight: MetricSeries
    heart_rate: MetricSeries
