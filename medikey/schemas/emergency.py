from typing import Optional
from datetime import datetime
from medikey.schemas.base import ApiModel


class EmergencyQRCode(ApiModel):
    url: str
    token: str
    user_id: int
    expires_at: datetime


class EmergencyCard(ApiModel):
    full_name: str
    age: Optional[int] = None
    date_of_birth: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
