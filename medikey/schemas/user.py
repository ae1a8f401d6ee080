from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from medikey.schemas.base import ApiModel


class UserBase(ApiModel):
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    avatar_url: Optional[str] = None


class UserCreate(ApiModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    email: EmailStr


# Profile fields a user may change; username and password are not among them
class UserUpdate(ApiModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("full_name", "email")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EmergencyInfoUpdate(ApiModel):
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None


# Properties to return to client; never carries the password hash
class User(UserBase):
    id: int
    username: str
    created_at: Optional[datetime] = None


class UserSummary(ApiModel):
    id: int
    username: str
