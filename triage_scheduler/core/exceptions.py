"""
Domain errors raised by the services.

Each error carries the HTTP status the transport layer renders it with, so
services stay free of FastAPI types and handlers stay free of branching.
"""
from fastapi import status


class SchedulerError(Exception):
    """Base class for every failure the services surface to callers."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Unexpected scheduler error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def kind(self) -> str:
        return type(self).__name__


# Authentication
class DuplicateUsername(SchedulerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Username already registered"

class UserNotFound(SchedulerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "User not found"

class InvalidCredentials(SchedulerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid username or password"

class Unauthenticated(SchedulerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not logged in. Please login first."


# Authorization
class Forbidden(SchedulerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not enough permissions"


# Appointments
class NotFound(SchedulerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Appointment not found"

class InvalidReference(SchedulerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Referenced user does not exist or has the wrong role"

class InvalidTime(SchedulerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Appointment time must be in the future"

class SchedulingConflict(SchedulerError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Time slot already booked"

class InvalidState(SchedulerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Cannot update cancelled or completed appointments"


AUTHENTICATION_ERRORS = (UserNotFound, InvalidCredentials, Unauthenticated)
