"""
Serializes a user's data into the plain dicts handed to the AI helpers.

File contents never leave the database this way; records are described by
their metadata only.
"""

from typing import Any, Dict, List, Sequence

from medikey import schemas
from medikey.models import Appointment, HealthMetric, MedicalRecord, User
from medikey.utils.timezone import calculate_age

CHAT_METRIC_LIMIT = 50
SUMMARY_RECORD_LIMIT = 5


def user_profile(user: User) -> Dict[str, Any]:
    profile = schemas.User.model_validate(user).model_dump(mode="json", by_alias=True)
    profile["age"] = calculate_age(user.date_of_birth)
    return profile


def record_digest(records: Sequence[MedicalRecord]) -> List[Dict[str, Any]]:
    return [
        schemas.MedicalRecordSummary.model_validate(record).model_dump(mode="json", by_alias=True)
        for record in records
    ]


def metric_digest(metrics: Sequence[HealthMetric]) -> List[Dict[str, Any]]:
    return [
        schemas.HealthMetric.model_validate(metric).model_dump(mode="json", by_alias=True)
        for metric in metrics
    ]


def appointment_digest(appointments: Sequence[Appointment]) -> List[Dict[str, Any]]:
    return [
        schemas.Appointment.model_validate(appointment).model_dump(mode="json", by_alias=True)
        for appointment in appointments
    ]
