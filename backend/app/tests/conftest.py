"""
Shared fixtures: a fresh application and SQLite database per test.
"""
from datetime import date
import pytest
from fastapi.testclient import TestClient
from app.core.config import Settings
from app.db.session import init_db
from app.main import create_app
from app.models.user import User
from app.schemas.ride import RideCreate
from app.services import ride_service, user_service


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'rideconnect-test.db'}",
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    init_db(application.state.engine)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    """Insert a user directly, skipping bcrypt for speed."""
    counter = {"n": 0}

    def _make_user(name: str = None) -> User:
        counter["n"] += 1
        name = name or f"Rider {counter['n']}"
        return user_service.create_user(
            db,
            name=name,
            email=f"rider{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            recovery_question="What is your pet's name?",
            recovery_answer_hash="not-a-real-hash",
        )

    return _make_user


@pytest.fixture
def make_ride(db):
    def _make_ride(host: User, seats: int = 2, total_fare: int = 600, ride_date: date = date(2025, 11, 20), time: str = "09:00"):
        payload = RideCreate(**{
            "from": "Main Gate",
            "to": "Railway Station",
            "date": ride_date,
            "time": time,
            "seats": seats,
            "totalFare": total_fare,
        })
        return ride_service.create_ride(db, host, payload)

    return _make_ride


@pytest.fixture
def signup(client):
    """Sign up through the API and return (user, token)."""
    counter = {"n": 0}

    def _signup(name: str = None, email: str = None, password: str = "secret123"):
        counter["n"] += 1
        response = client.post(
            "/api/auth/signup",
            json={
                "name": name or f"Student {counter['n']}",
                "email": email or f"student{counter['n']}@example.com",
                "password": password,
                "recoveryQuestion": "What is your pet's name?",
                "recoveryAnswer": "Fluffy",
            }
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]

    return _signup
