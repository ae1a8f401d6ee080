from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import Field, field_validator
from medikey.schemas.base import ApiModel


# Properties returned in listings; the file itself is left out
class MedicalRecordSummary(ApiModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    record_type: str
    provider: Optional[str] = None
    provider_type: Optional[str] = None
    record_date: datetime
    file_type: str
    file_name: str
    file_size: int
    tags: List[str] = Field(default_factory=list)
    ai_summary: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, v: Any) -> List[str]:
        return v or []


class MedicalRecord(MedicalRecordSummary):
    file_content: str


class RecentRecordsPage(ApiModel):
    records: List[MedicalRecordSummary]
    total: int
    per_page: int
    page: int


class RecordSummaryResponse(ApiModel):
    summary: Optional[str] = None


class GenerateSummaryResponse(ApiModel):
    success: bool
    summary: Optional[str] = None


class DocumentAnalysis(ApiModel):
    diagnoses: List[Any] = Field(default_factory=list)
    medications: List[Any] = Field(default_factory=list)
    vital_signs: Dict[str, Any] = Field(default_factory=dict)
    recommendations: List[Any] = Field(default_factory=list)
    key_findings: List[Any] = Field(default_factory=list)
