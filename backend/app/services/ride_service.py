"""
Ride ledger: ride creation, seat claiming, fare split and listing.
"""
from datetime import date
from typing import Dict, List, Optional
import logging
from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import AlreadyHost, AlreadyJoined, RideFull, RideNotFound, UnexpectedError
from app.core.utils import serialize_date, utcnow
from app.models.ride import Ride, RideParticipant, RideStatus
from app.models.user import User
from app.schemas.ride import RideCreate, RideParticipantResponse, RideResponse

logger = logging.getLogger(__name__)


def fare_per_person(total_fare: int, seats: int) -> int:
    """
    Split a fare between the host and every seat, rounding up.

    The host takes one implicit share, so the divisor is ``seats + 1``.
    Integer ceiling division keeps the result exact.
    """
    if seats < 0 or total_fare < 0:
        raise ValueError("total_fare and seats must be non-negative")
    return (total_fare + seats) // (seats + 1)


def savings(total_fare: int, seats: int) -> int:
    """What one rider saves compared with paying the whole fare."""
    return total_fare - fare_per_person(total_fare, seats)


def parse_ride_id(raw_id) -> int:
    """Ride ids travel as strings; anything that is not a positive integer is unknown."""
    try:
        ride_id = int(raw_id)
    except (TypeError, ValueError):
        raise RideNotFound()
    if ride_id <= 0:
        raise RideNotFound()
    return ride_id


def _ordered(query):
    return query.order_by(Ride.date.asc(), Ride.time.asc(), Ride.created_at.asc(), Ride.id.asc())


def _storage_failure(db: Session, action: str) -> UnexpectedError:
    """Roll back after a database error and hide its details from the caller."""
    db.rollback()
    logger.error(f"Database error while {action}", exc_info=True)
    return UnexpectedError()


def create_ride(db: Session, host: User, ride_data: RideCreate) -> Ride:
    """Insert a new upcoming ride owned by ``host``. The host holds no seat."""
    host_id = host.id
    ride = Ride(
        origin=ride_data.from_,
        destination=ride_data.to,
        date=ride_data.date,
        time=ride_data.time,
        seats=ride_data.seats,
        total_fare=ride_data.total_fare,
        note=ride_data.note,
        posted_by=host.name,
        verified=True,
        status=RideStatus.UPCOMING,
        host_id=host_id,
        participant_count=0,
    )
    db.add(ride)
    try:
        db.commit()
    except SQLAlchemyError:
        raise _storage_failure(db, f"storing a ride for user {host_id}")
    db.refresh(ride)
    logger.info(f"Ride {ride.id} created by user {host_id}: {ride.origin} -> {ride.destination} on {ride.date} {ride.time}")
    return ride


def get_ride(db: Session, ride_id: int) -> Ride:
    ride = db.get(Ride, ride_id)
    if not ride:
        raise RideNotFound()
    return ride


def _rejection_reason(db: Session, user: User, ride_id: int) -> Exception:
    """Re-read the ride after a refused join and name the first failed precondition."""
    ride = db.get(Ride, ride_id)
    if not ride:
        return RideNotFound()
    if ride.host_id == user.id:
        return AlreadyHost()
    if any(p.user_id == user.id for p in ride.participants):
        return AlreadyJoined()
    if ride.participant_count >= ride.seats:
        return RideFull()
    # Capacity was taken by a concurrent join that has since been undone
    logger.warning(f"Join of ride {ride_id} by user {user.id} refused but preconditions now hold")
    return RideFull()


def join_ride(db: Session, user: User, ride_id: int) -> Ride:
    """
    Claim one seat on a ride for ``user``.

    The admission check and the seat claim are one conditional UPDATE on the
    ride row: the counter is bumped only if the caller is not the host, is
    not already a participant, and a seat is free. The database row lock
    makes concurrent claims for the last seat serialize, so at most
    ``seats`` participants are ever admitted. The participant row is added
    in the same transaction; if anything fails nothing is kept.
    """
    user_id = user.id
    joined_at = utcnow()
    already_member = exists().where(
        RideParticipant.ride_id == ride_id,
        RideParticipant.user_id == user_id,
    )
    try:
        result = db.execute(
            update(Ride)
            .where(
                Ride.id == ride_id,
                Ride.host_id != user_id,
                Ride.participant_count < Ride.seats,
                ~already_member,
            )
            .values(participant_count=Ride.participant_count + 1, updated_at=joined_at)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError:
        raise _storage_failure(db, f"claiming a seat on ride {ride_id}")

    if result.rowcount != 1:
        db.rollback()
        reason = _rejection_reason(db, user, ride_id)
        logger.info(f"User {user_id} could not join ride {ride_id}: {reason.code}")
        raise reason

    db.add(RideParticipant(
        ride_id=ride_id,
        user_id=user_id,
        name=user.name,
        joined_at=joined_at,
    ))
    try:
        db.commit()
    except IntegrityError:
        # Same user racing with themselves; the unique index keeps one row
        db.rollback()
        logger.info(f"User {user_id} could not join ride {ride_id}: already_joined")
        raise AlreadyJoined()
    except SQLAlchemyError:
        raise _storage_failure(db, f"adding user {user_id} to ride {ride_id}")

    ride = get_ride(db, ride_id)
    logger.info(f"User {user_id} joined ride {ride_id} ({ride.participant_count}/{ride.seats} seats taken)")
    return ride


def list_rides(db: Session) -> List[Ride]:
    """All rides by date, then time, then creation order."""
    return list(db.execute(_ordered(select(Ride))).scalars().all())


def list_rides_for_user(db: Session, user: User) -> Dict[str, List[Ride]]:
    """Rides the user hosts and rides the user has joined, each in listing order."""
    hosted = db.execute(_ordered(select(Ride).where(Ride.host_id == user.id))).scalars().all()
    joined = db.execute(
        _ordered(
            select(Ride)
            .join(RideParticipant, RideParticipant.ride_id == Ride.id)
            .where(RideParticipant.user_id == user.id)
        )
    ).scalars().all()
    return {"hosted": list(hosted), "joined": list(joined)}


def mark_completed_rides(db: Session, today: Optional[date] = None) -> int:
    """Move upcoming rides dated before ``today`` to completed. Returns how many changed."""
    today = today or date.today()
    result = db.execute(
        update(Ride)
        .where(Ride.status == RideStatus.UPCOMING, Ride.date < today)
        .values(status=RideStatus.COMPLETED, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount:
        logger.info(f"Marked {result.rowcount} rides before {today} as completed")
    return result.rowcount


def serialize_ride(ride: Ride) -> RideResponse:
    """Transport shape of a ride, with the fare split computed on the fly."""
    return RideResponse(
        id=str(ride.id),
        from_=ride.origin,
        to=ride.destination,
        date=ride.date,
        time=ride.time,
        seats=ride.seats,
        total_fare=ride.total_fare,
        posted_by=ride.posted_by,
        note=ride.note,
        verified=ride.verified,
        status=ride.status,
        host_id=str(ride.host_id),
        participants=[
            RideParticipantResponse(
                user_id=str(p.user_id),
                name=p.name,
                joined_at=serialize_date(p.joined_at),
            )
            for p in ride.participants
        ],
        fare_per_person=fare_per_person(ride.total_fare, ride.seats),
        savings=savings(ride.total_fare, ride.seats),
    )
