"""
Role-based projection of stored appointments.

``project_appointment`` is pure: profiles are looked up by the caller and
passed in, and a missing profile row falls back to a default-filled view
instead of failing.
"""
from typing import Optional

from ..core.security import UserRole
from ..models.appointment import Appointment
from ..models.doctor import DoctorProfile
from ..models.patient import PatientProfile
from ..schemas.appointment import (
    AppointmentResponse, DoctorInfo, LimitedDoctorInfo, PatientInfo
)


def patient_info(patient_id: int, profile: Optional[PatientProfile]) -> PatientInfo:
    if profile is None:
        return PatientInfo(patient_id=patient_id)

    return PatientInfo(
        patient_id=patient_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        age=profile.age or 0,
        gender=profile.gender,
        symptom=profile.symptom,
        medical_history=profile.medical_history,
        allergies=profile.allergies,
        current_medications=profile.current_medications,
        triage_priority=profile.triage_priority,
    )


def doctor_info(doctor_id: int, profile: Optional[DoctorProfile]) -> DoctorInfo:
    if profile is None:
        return DoctorInfo(doctor_id=doctor_id)

    return DoctorInfo(
        doctor_id=doctor_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        specialty=profile.specialty,
        license_number=profile.license_number,
        work_time=profile.work_time,
    )


def limited_doctor_info(profile: Optional[DoctorProfile]) -> LimitedDoctorInfo:
    if profile is None:
        return LimitedDoctorInfo()

    return LimitedDoctorInfo(
        first_name=profile.first_name,
        last_name=profile.last_name,
        specialty=profile.specialty,
    )


def project_appointment(
    appointment: Appointment,
    role: UserRole,
    patient_profile: Optional[PatientProfile] = None,
    doctor_profile: Optional[DoctorProfile] = None,
) -> AppointmentResponse:
    """Build the view of ``appointment`` that a caller with ``role`` may see."""
    view = AppointmentResponse(
        appointment_id=appointment.id,
        patient_id=appointment.patient_id,
        doctor_id=appointment.doctor_id,
        appointment_time=appointment.appointment_time,
        reason=appointment.reason,
        status=appointment.status,
        created_at=appointment.created_at,
    )

    if role in (UserRole.ADMIN, UserRole.DOCTOR):
        view.patient_info = patient_info(appointment.patient_id, patient_profile)
        view.doctor_info = doctor_info(appointment.doctor_id, doctor_profile)
    elif role == UserRole.PATIENT:
        view.limited_doctor_info = limited_doctor_info(doctor_profile)
    else:
        raise ValueError(f"Unhandled role: {role}")

    return view
