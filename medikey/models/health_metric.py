from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class HealthMetric(Base):
    """A single reading, entered by hand or relayed from a smartwatch"""
    __tablename__ = "health_metrics"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    metric_type = Column(String, nullable=False)  # blood_pressure, blood_sugar, weight, heart_rate, ...
    value = Column(Text, nullable=False)  # scalar as text, compound values as JSON text
    unit = Column(String, nullable=False)
    recorded_at = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="health_metrics")

    __table_args__ = (
        Index("idx_health_metrics_user_type_recorded", "user_id", "metric_type", "recorded_at"),
    )
