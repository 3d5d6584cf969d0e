"""
Ride routes: listing, posting and joining shared rides.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.ride import MyRidesResponse, RideCreate, RideResponse
from app.api.dependencies import get_current_user
from app.services import ride_service

router = APIRouter(prefix="/rides", tags=["rides"])


@router.get("", response_model=List[RideResponse])
def list_rides(db: Session = Depends(get_db)):
    """List all rides sorted by date, time and posting order."""
    return [ride_service.serialize_ride(ride) for ride in ride_service.list_rides(db)]


@router.post("", response_model=RideResponse, status_code=status.HTTP_201_CREATED)
def create_ride(
    ride_data: RideCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Post a new ride hosted by the current user."""
    ride = ride_service.create_ride(db, current_user, ride_data)
    return ride_service.serialize_ride(ride)


@router.get("/mine", response_model=MyRidesResponse)
def my_rides(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rides the current user hosts or has joined."""
    rides = ride_service.list_rides_for_user(db, current_user)
    return MyRidesResponse(
        hosted=[ride_service.serialize_ride(r) for r in rides["hosted"]],
        joined=[ride_service.serialize_ride(r) for r in rides["joined"]],
    )


@router.get("/{ride_id}", response_model=RideResponse)
def get_ride(ride_id: str, db: Session = Depends(get_db)):
    """Get a single ride."""
    ride = ride_service.get_ride(db, ride_service.parse_ride_id(ride_id))
    return ride_service.serialize_ride(ride)


@router.post("/{ride_id}/join", response_model=RideResponse)
def join_ride(
    ride_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Claim a seat on a ride."""
    ride = ride_service.join_ride(db, current_user, ride_service.parse_ride_id(ride_id))
    return ride_service.serialize_ride(ride)
