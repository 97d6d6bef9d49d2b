from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..core.security import UserRole

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    # Profiles (optional, one per user, matching the user's role)
    patient_profile = relationship("PatientProfile", back_populates="patient", uselist=False)
    doctor_profile = relationship("DoctorProfile", back_populates="doctor", uselist=False)
    admin_profile = relationship("AdminProfile", back_populates="admin", uselist=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
