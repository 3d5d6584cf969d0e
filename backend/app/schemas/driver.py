"""
Pydantic schemas for Driver entity.
"""
from typing import List, Optional
from app.schemas.user import CamelModel


class DriverResponse(CamelModel):
    """Schema for driver directory entries."""
    id: str
    name: str
    rating: float
    total_rides: int
    vehicle_type: str
    vehicle_number: str
    experience: str
    phone: str
    languages: List[str] = []
    is_verified: bool
    price_per_km: float
    availability: str
    routes: List[str] = []
    image: Optional[str] = None
