"""
Patient Triage Scheduler

A FastAPI-based backend for booking medical appointments between patients
and doctors, with session authentication and role-scoped visibility of
medical data.
"""

__version__ = "1.0.0"
