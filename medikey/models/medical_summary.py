from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class MedicalSummary(Base):
    """Cached AI summary of a user's health history, one row per user"""
    __tablename__ = "medical_summaries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    summary = Column(Text, nullable=True)
    last_updated = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="medical_summary")
