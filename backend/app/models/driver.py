"""
Driver model for the read-only driver directory.
"""
from sqlalchemy import Column, String, Float, Integer, Boolean, JSON
from app.db.base import BaseModel


class Driver(BaseModel):
    """Verified driver profile shown in the directory."""
    __tablename__ = "drivers"

    name = Column(String(100), nullable=False, index=True)
    rating = Column(Float, nullable=False)
    total_rides = Column(Integer, nullable=False)
    vehicle_type = Column(String(20), nullable=False)  # Auto, Sedan, SUV, Hatchback
    vehicle_number = Column(String(20), nullable=False)
    experience = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=False)
    languages = Column(JSON, nullable=False, default=list)
    is_verified = Column(Boolean, default=True, nullable=False)
    price_per_km = Column(Float, nullable=False)
    availability = Column(String(20), default="Available", nullable=False)  # Available, Busy, Offline
    routes = Column(JSON, nullable=False, default=list)
    image = Column(String(255), nullable=True)
