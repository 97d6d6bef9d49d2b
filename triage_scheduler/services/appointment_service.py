from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import List, Optional
import logging

from ..core.exceptions import (
    Forbidden, InvalidReference, InvalidState, InvalidTime,
    NotFound, SchedulingConflict, UserNotFound
)
from ..core.security import CallerContext, UserRole
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import DoctorProfile
from ..models.patient import PatientProfile
from ..models.user import User
from ..schemas.appointment import AppointmentRequest, AppointmentResponse, AppointmentUpdate
from .projection import project_appointment

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def has_access(appointment: Appointment, role: UserRole, user_id: int) -> bool:
    """Whether a caller may see and modify ``appointment``."""
    if role == UserRole.ADMIN:
        return True
    elif role == UserRole.DOCTOR:
        return appointment.doctor_id == user_id
    elif role == UserRole.PATIENT:
        return appointment.patient_id == user_id
    raise ValueError(f"Unhandled role: {role}")


class AppointmentService:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Create ------------- #
    def create_appointment(
        self, request: AppointmentRequest, caller: CallerContext
    ) -> AppointmentResponse:
        """Book a new appointment.

        Patients and doctors may only book appointments they take part in;
        admins may book for anyone. The slot must be in the future and free
        for both the doctor and the patient.
        """
        current_user = self._get_caller(caller)

        if current_user.role == UserRole.PATIENT:
            if request.patient_id != caller.user_id:
                raise Forbidden("Patients can only create appointments for themselves")
        elif current_user.role == UserRole.DOCTOR:
            if request.doctor_id != caller.user_id:
                raise Forbidden("Doctors can only create appointments for themselves")
        elif current_user.role != UserRole.ADMIN:
            raise ValueError(f"Unhandled role: {current_user.role}")

        patient = self._resolve_participant(request.patient_id, UserRole.PATIENT)
        doctor = self._resolve_participant(request.doctor_id, UserRole.DOCTOR)

        self._ensure_future(request.appointment_time)
        self.check_time_conflicts(request.appointment_time, doctor.id, patient.id)

        appointment = Appointment(
            patient_id=patient.id,
            doctor_id=doctor.id,
            appointment_time=request.appointment_time,
            reason=request.reason,
            status=AppointmentStatus.SCHEDULED,
            created_at=utcnow(),
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(
            f"Appointment {appointment.id} booked: patient {patient.id}, "
            f"doctor {doctor.id} at {appointment.appointment_time.isoformat()}"
        )
        return self._project(appointment, current_user.role)

    # ------------- Read ------------- #
    def get_appointments(self, caller: CallerContext) -> List[AppointmentResponse]:
        """Appointments visible to the caller: own ones, or all for admins."""
        self._get_caller(caller)

        query = self.db.query(Appointment)
        if caller.role == UserRole.PATIENT:
            query = query.filter(Appointment.patient_id == caller.user_id)
        elif caller.role == UserRole.DOCTOR:
            query = query.filter(Appointment.doctor_id == caller.user_id)
        elif caller.role != UserRole.ADMIN:
            raise ValueError(f"Unhandled role: {caller.role}")

        appointments = query.order_by(Appointment.appointment_time, Appointment.id).all()
        return [self._project(a, caller.role) for a in appointments]

    def get_appointment_by_id(
        self, appointment_id: int, caller: CallerContext
    ) -> AppointmentResponse:
        appointment = self._get_accessible(appointment_id, caller, "view")
        return self._project(appointment, caller.role)

    # ------------- Update ------------- #
    def update_appointment(
        self, appointment_id: int, update: AppointmentUpdate, caller: CallerContext
    ) -> AppointmentResponse:
        """Reschedule an appointment or edit its reason.

        Only admins may reassign the doctor or the patient. Cancelled and
        completed appointments are frozen.
        """
        appointment = self._get_accessible(appointment_id, caller, "update")

        if appointment.is_terminal:
            raise InvalidState("Cannot update cancelled or completed appointments.")

        doctor_changed = update.doctor_id is not None and update.doctor_id != appointment.doctor_id
        patient_changed = update.patient_id is not None and update.patient_id != appointment.patient_id

        if not caller.is_admin:
            if doctor_changed:
                raise Forbidden("You do not have permission to change the doctor for this appointment.")
            if patient_changed:
                raise Forbidden("You do not have permission to change the patient for this appointment.")

        final_doctor_id = appointment.doctor_id
        final_patient_id = appointment.patient_id
        if doctor_changed:
            final_doctor_id = self._resolve_participant(update.doctor_id, UserRole.DOCTOR).id
        if patient_changed:
            final_patient_id = self._resolve_participant(update.patient_id, UserRole.PATIENT).id

        self._ensure_future(update.appointment_time)
        self.check_time_conflicts(
            update.appointment_time,
            final_doctor_id,
            final_patient_id,
            exclude_appointment_id=appointment.id,
        )

        appointment.doctor_id = final_doctor_id
        appointment.patient_id = final_patient_id
        appointment.appointment_time = update.appointment_time
        appointment.reason = update.reason

        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} updated by user {caller.user_id}")
        return self._project(appointment, caller.role)

    # ------------- Status changes ------------- #
    def cancel_appointment(
        self, appointment_id: int, caller: CallerContext
    ) -> AppointmentResponse:
        """Soft-delete an appointment. Cancelling twice is harmless."""
        appointment = self._get_accessible(appointment_id, caller, "cancel")

        appointment.status = AppointmentStatus.CANCELLED
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} cancelled by user {caller.user_id}")
        return self._project(appointment, caller.role)

    def complete_appointment(
        self, appointment_id: int, caller: CallerContext
    ) -> AppointmentResponse:
        """Mark a scheduled appointment as held. Doctors and admins only."""
        appointment = self._get_accessible(appointment_id, caller, "complete")

        if caller.role == UserRole.PATIENT:
            raise Forbidden("Patients cannot complete appointments.")

        if appointment.status != AppointmentStatus.SCHEDULED:
            raise InvalidState("Only scheduled appointments can be completed.")

        appointment.status = AppointmentStatus.COMPLETED
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} completed by user {caller.user_id}")
        return self._project(appointment, caller.role)

    # ------------- Conflict check ------------- #
    def find_conflicts(
        self,
        time: datetime,
        doctor_id: Optional[int] = None,
        patient_id: Optional[int] = None,
        exclude_appointment_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Live appointments of a doctor or patient at exactly ``time``."""
        query = self.db.query(Appointment).filter(
            Appointment.appointment_time == time,
            Appointment.status != AppointmentStatus.CANCELLED,
        )
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)

        return [a for a in query.all() if a.id != exclude_appointment_id]

    def check_time_conflicts(
        self,
        time: datetime,
        doctor_id: int,
        patient_id: int,
        exclude_appointment_id: Optional[int] = None,
    ) -> None:
        # Exact instant equality; appointments have no duration
        if self.find_conflicts(time, doctor_id=doctor_id, exclude_appointment_id=exclude_appointment_id):
            logger.info(f"Rejected booking: doctor {doctor_id} busy at {time.isoformat()}")
            raise SchedulingConflict("Doctor already has an appointment at this time.")

        if self.find_conflicts(time, patient_id=patient_id, exclude_appointment_id=exclude_appointment_id):
            logger.info(f"Rejected booking: patient {patient_id} busy at {time.isoformat()}")
            raise SchedulingConflict("Patient already has an appointment at this time.")

    # ------------- Helpers ------------- #
    def _get_caller(self, caller: CallerContext) -> User:
        user = self.db.get(User, caller.user_id)
        if not user:
            raise UserNotFound(f"User not found with id: {caller.user_id}")
        return user

    def _resolve_participant(self, user_id: int, role: UserRole) -> User:
        label = role.value.lower()
        user = self.db.get(User, user_id)
        if not user:
            raise InvalidReference(f"{label.capitalize()} not found with id: {user_id}")
        if user.role != role:
            raise InvalidReference(f"User with id {user_id} is not a {label}")
        return user

    def _get_accessible(self, appointment_id: int, caller: CallerContext, action: str) -> Appointment:
        appointment = self.db.get(Appointment, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found.")
        if not has_access(appointment, caller.role, caller.user_id):
            raise Forbidden(f"You do not have permission to {action} this appointment.")
        return appointment

    @staticmethod
    def _ensure_future(time: datetime) -> None:
        if time <= utcnow():
            raise InvalidTime("Appointment time must be in the future")

    def _project(self, appointment: Appointment, role: UserRole) -> AppointmentResponse:
        patient_profile = self.db.get(PatientProfile, appointment.patient_id)
        doctor_profile = self.db.get(DoctorProfile, appointment.doctor_id)
        return project_appointment(appointment, role, patient_profile, doctor_profile)
