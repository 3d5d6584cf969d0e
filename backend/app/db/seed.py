"""
Demo data bootstrap: fills empty driver and ride tables from JSON files.

Run with ``python -m app.db.seed`` or set SEED_ON_STARTUP=true.
"""
from datetime import date
import json
import logging
import os
import re
from typing import Dict, List
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.core.config import Settings
from app.core.security import get_password_hash, get_recovery_answer_hash
from app.models.driver import Driver
from app.models.ride import Ride, RideStatus
from app.models.user import User
from app.services import user_service

logger = logging.getLogger(__name__)

SEED_EMAIL_DOMAIN = "seed.rideconnect"
SEED_PASSWORD = "SeedAccount#123"
SEED_QUESTION = "What is your pet's name?"
SEED_ANSWER = "fluffy"

DRIVER_FIELDS = {
    "name": "name",
    "rating": "rating",
    "totalRides": "total_rides",
    "vehicleType": "vehicle_type",
    "vehicleNumber": "vehicle_number",
    "experience": "experience",
    "phone": "phone",
    "languages": "languages",
    "isVerified": "is_verified",
    "pricePerKm": "price_per_km",
    "availability": "availability",
    "routes": "routes",
    "image": "image",
}


def seed_email(posted_by: str) -> str:
    """Email for the synthesized host of a seeded ride, e.g. 'Ana K.' -> 'ana.k@seed.rideconnect'."""
    slug = re.sub(r"[^a-z0-9]+", ".", posted_by.strip().lower()).strip(".")
    return f"{slug}@{SEED_EMAIL_DOMAIN}"


def load_json(path: str) -> List[Dict]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def seed_drivers(db: Session, drivers: List[Dict]) -> int:
    if db.scalar(select(func.count()).select_from(Driver)):
        return 0
    for record in drivers:
        db.add(Driver(**{column: record[key] for key, column in DRIVER_FIELDS.items() if key in record}))
    db.commit()
    logger.info(f"Seeded {len(drivers)} driver profiles")
    return len(drivers)


def seed_rides(db: Session, rides: List[Dict]) -> int:
    if db.scalar(select(func.count()).select_from(Ride)):
        return 0

    password_hash = get_password_hash(SEED_PASSWORD)
    answer_hash = get_recovery_answer_hash(SEED_ANSWER)
    hosts: Dict[str, User] = {}
    for record in rides:
        email = seed_email(record["postedBy"])
        host = hosts.get(email) or user_service.find_by_email(db, email)
        if not host:
            host = user_service.create_user(
                db,
                name=record["postedBy"],
                email=email,
                password_hash=password_hash,
                recovery_question=SEED_QUESTION,
                recovery_answer_hash=answer_hash,
            )
        hosts[email] = host

        db.add(Ride(
            origin=record["from"],
            destination=record["to"],
            date=date.fromisoformat(record["date"]),
            time=record["time"],
            seats=record["seats"],
            total_fare=record["totalFare"],
            note=record.get("note"),
            posted_by=record["postedBy"],
            verified=record.get("verified", True),
            status=RideStatus(record.get("status", RideStatus.UPCOMING.value)),
            host_id=host.id,
            participant_count=0,
        ))
    db.commit()
    logger.info(f"Seeded {len(rides)} ride listings")
    return len(rides)


def seed_initial_data(db: Session, data_dir: str) -> None:
    """Seed drivers and rides into empty tables."""
    seed_drivers(db, load_json(os.path.join(data_dir, "drivers.json")))
    seed_rides(db, load_json(os.path.join(data_dir, "rides.json")))


if __name__ == "__main__":
    from app.core.logging import setup_logging
    from app.db.session import create_db_engine, create_session_factory, init_db

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    engine = create_db_engine(settings)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        seed_initial_data(db, settings.SEED_DATA_DIR)
    finally:
        db.close()
