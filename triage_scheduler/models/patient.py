from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..core.database import Base

class PatientProfile(Base):
    __tablename__ = "patient_profile"

    patient_id = Column(Integer, ForeignKey("users.id"), primary_key=True)

    # Personal information
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    age = Column(Integer, nullable=False, default=0)
    gender = Column(String(20), nullable=True)

    # Medical information
    symptom = Column(Text, nullable=True)
    medical_history = Column(Text, nullable=True)
    allergies = Column(String(255), nullable=True)
    current_medications = Column(String(255), nullable=True)
    triage_priority = Column(String(20), nullable=True)

    patient = relationship("User", back_populates="patient_profile")

    def __repr__(self):
        return f"<PatientProfile(patient_id={self.patient_id}, name='{self.first_name} {self.last_name}')>"
