from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class MedicalRecord(Base):
    __tablename__ = "medical_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    record_type = Column(String, nullable=False)  # prescription, lab_report, diagnostic_image, ...
    provider = Column(String, nullable=True)  # hospital or laboratory name
    provider_type = Column(String, nullable=True)  # hospital, clinic, lab, ...
    record_date = Column(DateTime, nullable=False)

    # Uploaded document
    file_content = Column(Text, nullable=False)  # base64
    file_type = Column(String, nullable=False)  # MIME type
    file_name = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)

    tags = Column(JSON, nullable=True)
    ai_summary = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="medical_records")
