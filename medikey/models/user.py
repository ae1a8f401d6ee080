from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from medikey.db.base import Base
from medikey.utils.timezone import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    date_of_birth = Column(String, nullable=True)  # ISO date, kept as text
    gender = Column(String, nullable=True)

    # Emergency card
    blood_type = Column(String, nullable=True)
    allergies = Column(Text, nullable=True)
    chronic_conditions = Column(Text, nullable=True)
    emergency_contact_name = Column(String, nullable=True)
    emergency_contact_phone = Column(String, nullable=True)

    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    medical_records = relationship("MedicalRecord", back_populates="user", cascade="all, delete-orphan")
    health_metrics = relationship("HealthMetric", back_populates="user", cascade="all, delete-orphan")
    appointments = relationship("Appointment", back_populates="user", cascade="all, delete-orphan")
    family_members = relationship("FamilyMember", back_populates="user", cascade="all, delete-orphan")
    ai_chat_history = relationship("AiChatHistory", back_populates="user", cascade="all, delete-orphan")
    smartwatch_devices = relationship("SmartwatchDevice", back_populates="user", cascade="all, delete-orphan")
    medical_summary = relationship("MedicalSummary", back_populates="user", uselist=False, cascade="all, delete-orphan")
