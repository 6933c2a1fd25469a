# app/models/__init__.py
from app.models.user import User, UserRole
from app.models.meeting import Meeting
from app.models.participant import Participant

__all__ = ["User", "UserRole", "Meeting", "Participant"]
