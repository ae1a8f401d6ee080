from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class SmartwatchDevice(Base):
    __tablename__ = "smartwatch_devices"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    device_name = Column(String, nullable=False)
    device_id = Column(String, nullable=False)
    device_type = Column(String, nullable=False)  # apple_watch, fitbit, samsung_galaxy_watch, garmin, generic
    connected_at = Column(DateTime, default=utcnow)
    last_sync = Column(DateTime, nullable=True)
    status = Column(String, default="active")  # active, disconnected

    user = relationship("User", back_populates="smartwatch_devices")

    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_smartwatch_devices_user_device"),
    )
