"""
Ride model for shared rides and their participants.
"""
from sqlalchemy import (
    CheckConstraint, Column, Date, DateTime, Enum as SQLEnum, ForeignKey,
    Integer, String, Text, Boolean, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.core.utils import utcnow
from app.db.base import BaseModel
import enum

MIN_SEATS = 1
MAX_SEATS = 4
MIN_TOTAL_FARE = 100


class RideStatus(str, enum.Enum):
    """Ride status enumeration."""
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class Ride(BaseModel):
    """A host-owned ride offering with a bounded number of joinable seats."""
    __tablename__ = "rides"
    __table_args__ = (
        CheckConstraint(f"seats >= {MIN_SEATS} AND seats <= {MAX_SEATS}", name="ck_rides_seats"),
        CheckConstraint(f"total_fare >= {MIN_TOTAL_FARE}", name="ck_rides_total_fare"),
        CheckConstraint("participant_count >= 0 AND participant_count <= seats", name="ck_rides_capacity"),
    )

    origin = Column(String(200), nullable=False)
    destination = Column(String(200), nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    seats = Column(Integer, nullable=False)
    total_fare = Column(Integer, nullable=False)
    note = Column(Text, nullable=True)
    posted_by = Column(String(100), nullable=False)
    verified = Column(Boolean, default=True, nullable=False)
    status = Column(
        SQLEnum(RideStatus, values_callable=lambda e: [m.value for m in e]),
        default=RideStatus.UPCOMING,
        nullable=False,
    )
    host_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Mirrors len(participants); the join update checks it against seats
    participant_count = Column(Integer, default=0, nullable=False)

    # Relationships
    host = relationship("User", back_populates="hosted_rides")
    participants = relationship(
        "RideParticipant",
        back_populates="ride",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: [RideParticipant.joined_at, RideParticipant.id],
    )


class RideParticipant(BaseModel):
    """A non-host member of a ride."""
    __tablename__ = "ride_participants"
    __table_args__ = (
        UniqueConstraint("ride_id", "user_id", name="uq_ride_participants_ride_user"),
    )

    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    joined_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    ride = relationship("Ride", back_populates="participants")
    user = relationship("User", back_populates="ride_memberships")
