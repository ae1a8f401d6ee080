from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator
from medikey.schemas.base import ApiModel


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    MISSED = "missed"


# Shared properties
class AppointmentBase(ApiModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    appointment_type: str
    provider_name: str
    provider_type: Optional[str] = None
    location: Optional[str] = None
    appointment_date: datetime
    duration: int = Field(30, gt=0)
    reminder_set: bool = False
    reminder_time: Optional[datetime] = None
    notes: Optional[str] = None


# Properties to receive on appointment creation; status always starts as scheduled
class AppointmentCreate(AppointmentBase):
    pass


# Properties to receive on appointment update
class AppointmentUpdate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    appointment_type: Optional[str] = None
    provider_name: Optional[str] = None
    provider_type: Optional[str] = None
    location: Optional[str] = None
    appointment_date: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    reminder_set: Optional[bool] = None
    reminder_time: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    # Columns that are NOT NULL or always present in responses
    @field_validator(
        "title", "appointment_type", "provider_name", "appointment_date", "duration", "reminder_set", "status"
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class AppointmentStatusUpdate(ApiModel):
    status: AppointmentStatus


# Properties to return to client
class Appointment(AppointmentBase):
    id: int
    user_id: int
    status: str
    created_at: Optional[datetime] = None
