from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    appointment_type = Column(String, nullable=False)  # checkup, test, follow_up, ...
    provider_name = Column(String, nullable=False)
    provider_type = Column(String, nullable=True)  # doctor, laboratory, hospital, ...
    location = Column(String, nullable=True)
    appointment_date = Column(DateTime, nullable=False)
    duration = Column(Integer, default=30)  # minutes

    reminder_set = Column(Boolean, default=False)
    reminder_time = Column(DateTime, nullable=True)

    status = Column(String, default="scheduled")  # scheduled, confirmed, completed, cancelled, missed
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="appointments")
