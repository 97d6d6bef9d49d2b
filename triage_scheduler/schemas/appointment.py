"""
Appointment request and response shapes.

Responses are role-projected: doctors and admins receive ``patient_info``
and ``doctor_info``, patients receive only ``limited_doctor_info``.
"""
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from ..models.appointment import AppointmentStatus


def to_utc_naive(value: datetime) -> datetime:
    """Store and compare every instant as naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class AppointmentRequest(BaseModel):
    patient_id: int
    doctor_id: int
    # e.g. "2025-11-21T14:00:00"; naive values are taken as UTC
    appointment_time: datetime
    reason: Optional[str] = None

    @field_validator("appointment_time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc_naive(value)


class AppointmentUpdate(BaseModel):
    """Omitted participant ids keep the stored value."""
    appointment_time: datetime
    reason: Optional[str] = None
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None

    @field_validator("appointment_time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc_naive(value)


class PatientInfo(BaseModel):
    patient_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: int = 0
    gender: Optional[str] = None
    symptom: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    triage_priority: Optional[str] = None


class DoctorInfo(BaseModel):
    doctor_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    work_time: Optional[str] = None


class LimitedDoctorInfo(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    specialty: Optional[str] = None


class AppointmentResponse(BaseModel):
    appointment_id: int
    patient_id: int
    doctor_id: int
    appointment_time: datetime
    reason: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime] = None

    patient_info: Optional[PatientInfo] = None
    doctor_info: Optional[DoctorInfo] = None
    limited_doctor_info: Optional[LimitedDoctorInfo] = None


class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentResponse] = Field(default_factory=list)
    count: int = 0
