from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base

class DoctorProfile(Base):
    __tablename__ = "doctor_profile"

    doctor_id = Column(Integer, ForeignKey("users.id"), primary_key=True)

    # Personal information
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    # Professional information
    specialty = Column(String(100), nullable=True)
    license_number = Column(String(50), nullable=True)
    work_time = Column(String(255), nullable=True)

    doctor = relationship("User", back_populates="doctor_profile")

    def __repr__(self):
        return f"<DoctorProfile(doctor_id={self.doctor_id}, name='{self.first_name} {self.last_name}', specialty='{self.specialty}')>"
