"""
Driver directory: read-only listing and filters.
"""
from typing import Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.driver import Driver
from app.schemas.driver import DriverResponse


def filter_drivers(
    drivers: Iterable[Driver],
    vehicle_type: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Driver]:
    """
    Keep drivers matching the vehicle type (exact, "all" or empty matches
    everything) and whose name or any route contains ``query``, ignoring case.
    """
    needle = (query or "").strip().lower()
    matched = []
    for driver in drivers:
        if vehicle_type and vehicle_type != "all" and driver.vehicle_type != vehicle_type:
            continue
        if needle and needle not in driver.name.lower() and not any(
            needle in route.lower() for route in (driver.routes or [])
        ):
            continue
        matched.append(driver)
    return matched


def list_drivers(
    db: Session,
    vehicle_type: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Driver]:
    """Drivers sorted by name, optionally filtered."""
    drivers = db.execute(select(Driver).order_by(Driver.name.asc(), Driver.id.asc())).scalars().all()
    return filter_drivers(drivers, vehicle_type=vehicle_type, query=query)


def serialize_driver(driver: Driver) -> DriverResponse:
    return DriverResponse(
        id=str(driver.id),
        name=driver.name,
        rating=driver.rating,
        total_rides=driver.total_rides,
        vehicle_type=driver.vehicle_type,
        vehicle_number=driver.vehicle_number,
        experience=driver.experience,
        phone=driver.phone,
        languages=list(driver.languages or []),
        is_verified=driver.is_verified,
        price_per_km=driver.price_per_km,
        availability=driver.availability,
        routes=list(driver.routes or []),
        image=driver.image,
    )
