"""
User model for authentication and account recovery.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """User model. Email is stored lowercased and is unique."""
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    # Nullable for accounts created before recovery questions existed
    recovery_question = Column(String(255), nullable=True)
    recovery_answer_hash = Column(String(255), nullable=True)

    # Relationships
    hosted_rides = relationship("Ride", back_populates="host")
    ride_memberships = relationship("RideParticipant", back_populates="user")
