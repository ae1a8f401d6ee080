from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator
from medikey.schemas.base import ApiModel


# The ORM attribute is relationship_type; clients see "relationship"
class FamilyMemberBase(ApiModel):
    name: str = Field(..., min_length=1)
    relationship_type: str = Field(..., alias="relationship")
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    avatar_url: Optional[str] = None


class FamilyMemberCreate(FamilyMemberBase):
    pass


class FamilyMemberUpdate(ApiModel):
    name: Optional[str] = None
    relationship_type: Optional[str] = Field(None, alias="relationship")
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("name", "relationship_type")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class FamilyMember(FamilyMemberBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
