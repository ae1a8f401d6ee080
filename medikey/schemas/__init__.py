from .base import ApiModel, Message
from .user import User, UserCreate, UserUpdate, UserSummary, EmergencyInfoUpdate
from .auth import LoginRequest, LoginResponse, RegisterResponse, Token
from .medical_record import (
    MedicalRecord,
    MedicalRecordSummary,
    RecentRecordsPage,
    RecordSummaryResponse,
    GenerateSummaryResponse,
    DocumentAnalysis,
)
from .health_metric import HealthMetric, HealthMetricCreate, HealthAnalytics, MetricSeries
from .appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentStatus,
    AppointmentStatusUpdate,
)
from .family_member import FamilyMember, FamilyMemberCreate, FamilyMemberUpdate
from .ai_chat import AiChat, ChatRequest, MedicalSummaryResponse
from .emergency import EmergencyCard, EmergencyQRCode
from .smartwatch import (
    SmartWatchMetric,
    ConnectedDevice,
    SmartwatchDevice,
    SendCommandRequest,
    SendCommandResponse,
    BroadcastRequest,
    BroadcastResponse,
)
