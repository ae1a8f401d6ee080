from .user import user
from .medical_record import medical_record
from .health_metric import health_metric
from .appointment import appointment
from .family_member import family_member
from .ai_chat import ai_chat
from .smartwatch_device import smartwatch_device
from .medical_summary import medical_summary

__all__ = [
    "user", "medical_record", "health_metric", "appointment", "family_member",
    "ai_chat", "smartwatch_device", "medical_summary",
]
