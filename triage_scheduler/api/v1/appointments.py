from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import CallerContext
from ...api.deps import get_caller_context
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import (
    AppointmentRequest, AppointmentUpdate, AppointmentResponse, AppointmentListResponse
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    request: AppointmentRequest,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    """Book an appointment.

    - PATIENT: only for themselves (patient_id must be the caller)
    - DOCTOR: only for themselves (doctor_id must be the caller)
    - ADMIN: for any patient and doctor
    """
    return AppointmentService(db).create_appointment(request, caller)

@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    """List the appointments visible to the caller."""
    appointments = AppointmentService(db).get_appointments(caller)
    return AppointmentListResponse(appointments=appointments, count=len(appointments))

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    return AppointmentService(db).get_appointment_by_id(appointment_id, caller)

@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    update: AppointmentUpdate,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    """Reschedule an appointment; admins may also reassign doctor or patient."""
    return AppointmentService(db).update_appointment(appointment_id, update, caller)

@router.delete("/{appointment_id}", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    """Cancel an appointment. The record is kept with status CANCELLED."""
    return AppointmentService(db).cancel_appointment(appointment_id, caller)

@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    return AppointmentService(db).complete_appointment(appointment_id, caller)
