from .user import User
from .medical_record import MedicalRecord
from .health_metric import HealthMetric
from .appointment import Appointment
from .family_member import FamilyMember
from .ai_chat import AiChatHistory
from .smartwatch_device import SmartwatchDevice
from .medical_summary import MedicalSummary
