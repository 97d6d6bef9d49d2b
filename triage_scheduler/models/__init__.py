from .user import User
from .patient import PatientProfile
from .doctor import DoctorProfile
from .admin import AdminProfile
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "User",
    "PatientProfile",
    "DoctorProfile",
    "AdminProfile",
    "Appointment",
    "AppointmentStatus",
]
