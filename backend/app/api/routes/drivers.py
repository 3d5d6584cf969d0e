"""
Driver directory routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.schemas.driver import DriverResponse
from app.services import driver_service

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.get("", response_model=List[DriverResponse])
def list_drivers(
    vehicle_type: Optional[str] = Query(default=None, alias="vehicleType"),
    q: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List drivers sorted by name, optionally filtered by vehicle type or search text."""
    drivers = driver_service.list_drivers(db, vehicle_type=vehicle_type, query=q)
    return [driver_service.serialize_driver(d) for d in drivers]
