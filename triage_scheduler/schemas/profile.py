from typing import Optional
from pydantic import BaseModel, Field


class PatientProfileData(BaseModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    age: int = Field(0, ge=0, le=150)
    gender: Optional[str] = Field(None, max_length=20)
    symptom: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = Field(None, max_length=255)
    current_medications: Optional[str] = Field(None, max_length=255)
    triage_priority: Optional[str] = Field(None, max_length=20)


class PatientProfileResponse(PatientProfileData):
    patient_id: int

    class Config:
        from_attributes = True


class DoctorProfileData(BaseModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    specialty: Optional[str] = Field(None, max_length=100)
    license_number: Optional[str] = Field(None, max_length=50)
    work_time: Optional[str] = Field(None, max_length=255)


class DoctorProfileResponse(DoctorProfileData):
    doctor_id: int

    class Config:
        from_attributes = True


class AdminProfileData(BaseModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    permissions: Optional[str] = Field(None, max_length=255)
    audit_logs: Optional[str] = None


class AdminProfileResponse(AdminProfileData):
    admin_id: int

    class Config:
        from_attributes = True
