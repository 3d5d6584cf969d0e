"""
Pydantic schemas for Ride entity.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import date, datetime
import re
from app.models.ride import MAX_SEATS, MIN_SEATS, MIN_TOTAL_FARE, RideStatus
from app.schemas.user import CamelModel

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class RideCreate(CamelModel):
    """Schema for ride creation. Numbers must be sent as JSON integers."""
    from_: str = Field(alias="from", min_length=2, max_length=200)
    to: str = Field(min_length=2, max_length=200)
    date: date
    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    seats: int = Field(ge=MIN_SEATS, le=MAX_SEATS, strict=True)
    total_fare: int = Field(ge=MIN_TOTAL_FARE, strict=True)
    note: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def require_iso_date(cls, v):
        """Only a YYYY-MM-DD string (or a date object) is a ride date; timestamps are rejected."""
        if isinstance(v, datetime):
            raise ValueError("date must be a calendar date, not a datetime")
        if isinstance(v, date):
            return v
        if isinstance(v, str) and ISO_DATE_RE.fullmatch(v):
            return v
        raise ValueError("date must be an ISO date string (YYYY-MM-DD)")


class RideParticipantResponse(CamelModel):
    """Schema for a ride participant."""
    user_id: str
    name: str
    joined_at: str


class RideResponse(CamelModel):
    """Serialized ride including the derived fare split."""
    id: str
    from_: str = Field(alias="from")
    to: str
    date: date
    time: str
    seats: int
    total_fare: int
    posted_by: str
    note: Optional[str] = None
    verified: bool
    status: RideStatus
    host_id: str
    participants: List[RideParticipantResponse] = []
    fare_per_person: int
    savings: int


class MyRidesResponse(CamelModel):
    """Rides the caller hosts and rides the caller has joined."""
    hosted: List[RideResponse] = []
    joined: List[RideResponse] = []
