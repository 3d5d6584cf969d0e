"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.ride import Ride, RideParticipant, RideStatus
from app.models.driver import Driver

__all__ = [
    "User",
    "Ride",
    "RideParticipant",
    "RideStatus",
    "Driver",
]
