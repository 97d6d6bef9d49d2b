from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..core.database import Base

class AdminProfile(Base):
    __tablename__ = "admin_profile"

    admin_id = Column(Integer, ForeignKey("users.id"), primary_key=True)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    permissions = Column(String(255), nullable=True)
    audit_logs = Column(Text, nullable=True)

    admin = relationship("User", back_populates="admin_profile")

    def __repr__(self):
        return f"<AdminProfile(admin_id={self.admin_id}, name='{self.first_name} {self.last_name}')>"
