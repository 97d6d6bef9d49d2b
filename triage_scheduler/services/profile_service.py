"""
Reading and writing the per-role profile records.

A profile may only be attached to a user whose role matches its kind; the
tables do not enforce this, so every write goes through the check here.
"""
from enum import Enum
from sqlalchemy.orm import Session
import logging

from ..core.exceptions import Forbidden, InvalidReference, NotFound
from ..core.security import CallerContext, UserRole
from ..models.admin import AdminProfile
from ..models.doctor import DoctorProfile
from ..models.patient import PatientProfile
from ..models.user import User

logger = logging.getLogger(__name__)


class ProfileKind(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


# kind -> (model, key column, owning role)
PROFILE_MODELS = {
    ProfileKind.PATIENT: (PatientProfile, "patient_id", UserRole.PATIENT),
    ProfileKind.DOCTOR: (DoctorProfile, "doctor_id", UserRole.DOCTOR),
    ProfileKind.ADMIN: (AdminProfile, "admin_id", UserRole.ADMIN),
}


class ProfileService:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, kind: ProfileKind, user_id: int, caller: CallerContext):
        model, _, _ = self._check(kind, user_id, caller)

        profile = self.db.get(model, user_id)
        if profile is None:
            raise NotFound(f"No {kind.value} profile for user {user_id}")
        return profile

    def upsert_profile(self, kind: ProfileKind, user_id: int, data: dict, caller: CallerContext):
        """Create the profile or overwrite the given fields."""
        model, key, _ = self._check(kind, user_id, caller)

        profile = self.db.get(model, user_id)
        if profile is None:
            profile = model(**{key: user_id})
            self.db.add(profile)

        for field, value in data.items():
            setattr(profile, field, value)

        self.db.commit()
        self.db.refresh(profile)

        logger.info(f"Saved {kind.value} profile for user {user_id}")
        return profile

    def _check(self, kind: ProfileKind, user_id: int, caller: CallerContext):
        if not caller.is_admin and caller.user_id != user_id:
            raise Forbidden("You can only access your own profile")

        model, key, owner_role = PROFILE_MODELS[kind]

        user = self.db.get(User, user_id)
        if not user:
            raise InvalidReference(f"User not found with id: {user_id}")
        if user.role != owner_role:
            raise InvalidReference(f"User with id {user_id} is not a {kind.value}")

        return model, key, owner_role
