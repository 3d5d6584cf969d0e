"""
Tests for ride endpoints.
"""
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def ride_payload(**overrides):
    payload = {
        "from": "Main Campus Gate",
        "to": "Central Railway Station",
        "date": "2025-11-20",
        "time": "17:45",
        "seats": 2,
        "totalFare": 600,
        "note": "Two bags",
    }
    payload.update(overrides)
    return payload


def test_create_ride(client, signup):
    """Test posting a ride."""
    host, token = signup(name="Priya")
    response = client.post("/api/rides", json=ride_payload(), headers=bearer(token))
    assert response.status_code == 201
    ride = response.json()
    assert ride["from"] == "Main Campus Gate"
    assert ride["to"] == "Central Railway Station"
    assert ride["date"] == "2025-11-20"
    assert ride["time"] == "17:45"
    assert ride["seats"] == 2
    assert ride["totalFare"] == 600
    assert ride["postedBy"] == "Priya"
    assert ride["hostId"] == host["id"]
    assert ride["status"] == "upcoming"
    assert ride["verified"] is True
    assert ride["participants"] == []
    assert ride["farePerPerson"] == 200
    assert ride["savings"] == 400
    assert isinstance(ride["id"], str)


def test_create_ride_requires_auth(client):
    response = client.post("/api/rides", json=ride_payload())
    assert response.status_code == 401


@pytest.mark.parametrize("overrides", [
    {"seats": 0},
    {"seats": 5},
    {"seats": "2"},
    {"totalFare": 99},
    {"totalFare": 250.5},
    {"from": "A"},
    {"to": ""},
    {"date": "next tuesday"},
    {"date": 1763596800},
    {"date": 1763596800.0},
    {"date": "2025-11-20T00:00:00"},
    {"date": "2025-11-20 "},
    {"time": "25:00"},
    {"time": None},
])
def test_create_ride_invalid_payload(client, signup, overrides):
    """Test ride validation rejects out-of-range or mistyped fields."""
    _, token = signup()
    response = client.post("/api/rides", json=ride_payload(**overrides), headers=bearer(token))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid payload"
    assert response.json()["error"] == "validation_error"


def test_create_ride_note_is_optional(client, signup):
    _, token = signup()
    payload = ride_payload()
    del payload["note"]
    response = client.post("/api/rides", json=payload, headers=bearer(token))
    assert response.status_code == 201
    assert response.json()["note"] is None


def test_list_rides_sorted_by_date_then_time(client, signup):
    """Test listing order."""
    _, token = signup()
    client.post("/api/rides", json=ride_payload(date="2025-12-01", time="08:00"), headers=bearer(token))
    client.post("/api/rides", json=ride_payload(date="2025-11-20", time="08:00"), headers=bearer(token))
    client.post("/api/rides", json=ride_payload(date="2025-11-20", time="07:30"), headers=bearer(token))

    response = client.get("/api/rides")
    assert response.status_code == 200
    assert [(r["date"], r["time"]) for r in response.json()] == [
        ("2025-11-20", "07:30"),
        ("2025-11-20", "08:00"),
        ("2025-12-01", "08:00"),
    ]


def test_list_rides_ties_keep_posting_order(client, signup):
    _, token = signup()
    first = client.post("/api/rides", json=ride_payload(to="First Stop"), headers=bearer(token)).json()
    second = client.post("/api/rides", json=ride_payload(to="Second Stop"), headers=bearer(token)).json()
    ids = [r["id"] for r in client.get("/api/rides").json()]
    assert ids == [first["id"], second["id"]]


def test_join_scenario_until_full(client, signup):
    """Two riders fill a two-seat ride; a third is turned away."""
    _, host_token = signup(name="Host")
    ride = client.post("/api/rides", json=ride_payload(seats=2, totalFare=600), headers=bearer(host_token)).json()

    first, first_token = signup(name="First")
    second, second_token = signup(name="Second")
    _, third_token = signup(name="Third")

    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(first_token))
    assert response.status_code == 200
    assert [p["userId"] for p in response.json()["participants"]] == [first["id"]]

    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(second_token))
    assert response.status_code == 200
    participants = response.json()["participants"]
    assert [p["userId"] for p in participants] == [first["id"], second["id"]]
    assert [p["name"] for p in participants] == ["First", "Second"]
    assert all(p["joinedAt"] for p in participants)

    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(third_token))
    assert response.status_code == 400
    assert response.json() == {"message": "Ride is full", "error": "ride_full"}

    listed = client.get(f"/api/rides/{ride['id']}").json()
    assert len(listed["participants"]) == 2


def test_join_twice_is_rejected(client, signup):
    _, host_token = signup()
    ride = client.post("/api/rides", json=ride_payload(seats=3), headers=bearer(host_token)).json()
    _, token = signup()

    assert client.post(f"/api/rides/{ride['id']}/join", headers=bearer(token)).status_code == 200
    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(token))
    assert response.status_code == 400
    assert response.json()["error"] == "already_joined"
    assert len(client.get(f"/api/rides/{ride['id']}").json()["participants"]) == 1


def test_host_cannot_join_own_ride(client, signup):
    _, host_token = signup()
    ride = client.post("/api/rides", json=ride_payload(seats=1), headers=bearer(host_token)).json()
    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(host_token))
    assert response.status_code == 400
    assert response.json()["error"] == "already_host"


def test_host_rejection_wins_over_full_ride(client, signup):
    _, host_token = signup()
    ride = client.post("/api/rides", json=ride_payload(seats=1), headers=bearer(host_token)).json()
    _, rider_token = signup()
    client.post(f"/api/rides/{ride['id']}/join", headers=bearer(rider_token))

    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(host_token))
    assert response.json()["error"] == "already_host"


def test_already_joined_wins_over_full_ride(client, signup):
    _, host_token = signup()
    ride = client.post("/api/rides", json=ride_payload(seats=1), headers=bearer(host_token)).json()
    _, rider_token = signup()
    client.post(f"/api/rides/{ride['id']}/join", headers=bearer(rider_token))

    response = client.post(f"/api/rides/{ride['id']}/join", headers=bearer(rider_token))
    assert response.json()["error"] == "already_joined"


@pytest.mark.parametrize("ride_id", ["999", "not-an-id", "0"])
def test_join_unknown_ride(client, signup, ride_id):
    _, token = signup()
    response = client.post(f"/api/rides/{ride_id}/join", headers=bearer(token))
    assert response.status_code == 404
    assert response.json()["message"] == "Ride not found"


def test_join_requires_auth(client, signup):
    _, host_token = signup()
    ride = client.post("/api/rides", json=ride_payload(), headers=bearer(host_token)).json()
    response = client.post(f"/api/rides/{ride['id']}/join")
    assert response.status_code == 401


def test_my_rides(client, signup):
    """Test hosted and joined ride lists."""
    _, alice_token = signup(name="Alice")
    _, bob_token = signup(name="Bob")
    alice_ride = client.post("/api/rides", json=ride_payload(to="Airport"), headers=bearer(alice_token)).json()
    bob_ride = client.post("/api/rides", json=ride_payload(to="Mall"), headers=bearer(bob_token)).json()
    client.post(f"/api/rides/{bob_ride['id']}/join", headers=bearer(alice_token))

    response = client.get("/api/rides/mine", headers=bearer(alice_token))
    assert response.status_code == 200
    body = response.json()
    assert [r["id"] for r in body["hosted"]] == [alice_ride["id"]]
    assert [r["id"] for r in body["joined"]] == [bob_ride["id"]]


def test_get_ride_not_found(client):
    assert client.get("/api/rides/12345").status_code == 404


def test_create_ride_storage_failure_is_hidden(client, signup, monkeypatch):
    """A database failure answers a generic 500 without internal detail."""
    _, token = signup()

    def failing_commit(self):
        raise OperationalError("INSERT INTO rides", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", failing_commit)
    response = client.post("/api/rides", json=ride_payload(), headers=bearer(token))
    assert response.status_code == 500
    assert response.json() == {"message": "Unexpected server error", "error": "unexpected_error"}
    assert "disk" not in response.text
