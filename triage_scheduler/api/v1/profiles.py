from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import CallerContext
from ...api.deps import get_caller_context
from ...services.profile_service import ProfileKind, ProfileService
from ...schemas.profile import (
    PatientProfileData, PatientProfileResponse,
    DoctorProfileData, DoctorProfileResponse,
    AdminProfileData, AdminProfileResponse
)

router = APIRouter(prefix="/profiles", tags=["Profiles"])

@router.get("/patient/{user_id}", response_model=PatientProfileResponse)
async def get_patient_profile(
    user_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).get_profile(ProfileKind.PATIENT, user_id, caller)
    return PatientProfileResponse.model_validate(profile)

@router.put("/patient/{user_id}", response_model=PatientProfileResponse)
async def save_patient_profile(
    user_id: int,
    data: PatientProfileData,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).upsert_profile(
        ProfileKind.PATIENT, user_id, data.model_dump(exclude_unset=True), caller
    )
    return PatientProfileResponse.model_validate(profile)

@router.get("/doctor/{user_id}", response_model=DoctorProfileResponse)
async def get_doctor_profile(
    user_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).get_profile(ProfileKind.DOCTOR, user_id, caller)
    return DoctorProfileResponse.model_validate(profile)

@router.put("/doctor/{user_id}", response_model=DoctorProfileResponse)
async def save_doctor_profile(
    user_id: int,
    data: DoctorProfileData,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).upsert_profile(
        ProfileKind.DOCTOR, user_id, data.model_dump(exclude_unset=True), caller
    )
    return DoctorProfileResponse.model_validate(profile)

@router.get("/admin/{user_id}", response_model=AdminProfileResponse)
async def get_admin_profile(
    user_id: int,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).get_profile(ProfileKind.ADMIN, user_id, caller)
    return AdminProfileResponse.model_validate(profile)

@router.put("/admin/{user_id}", response_model=AdminProfileResponse)
async def save_admin_profile(
    user_id: int,
    data: AdminProfileData,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    profile = ProfileService(db).upsert_profile(
        ProfileKind.ADMIN, user_id, data.model_dump(exclude_unset=True), caller
    )
    return AdminProfileResponse.model_validate(profile)
