import json as jsonlib

import pytest
import requests

from reservation_palace.app import create_app
from reservation_palace.client import ReservationApiClient

BASE_URL = "http://backend.test/api"

CUSTOMERS = [
    {"id": 3, "name": "Ada Lovelace", "phoneNumber": "555-0100", "email": "ada@example.com"},
    {"id": 4, "name": "Alan Turing", "phoneNumber": "555-0101", "email": "alan@example.com"},
]
TABLES = [
    {"id": 5, "tableNumber": "12", "numberOfSeats": 4},
    {"id": 6, "tableNumber": "Patio", "numberOfSeats": 2},
]
TIME_SLOTS = [
    {"id": 2, "slotId": "A1", "time": "14:30:00"},
    {"id": 7, "slotId": "B1", "time": "19:00:00"},
]
BOOKINGS = [
    {
        "id": 11, "bookingNumber": 1001, "customerId": 3, "tableId": 5, "bookingSlotId": 2,
        "bookingDate": "2025-06-01", "numberOfPeople": 4, "specialRequest": "", "isConfirmed": True,
    },
    {
        "id": 12, "bookingNumber": 1002, "customerId": 4, "tableId": 99, "bookingSlotId": "7",
        "bookingDate": "2025-06-02", "numberOfPeople": 2, "specialRequest": "Window seat",
        "isConfirmed": False,
    },
]


class FakeSession:
    """Stands in for requests.Session: records every call and replays canned responses."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.routes = {}

    def add(self, method, path, body=None, status=200, exc=None):
        self.routes[(method, path)] = (status, body, exc)

    def fail(self, method, path, status=500):
        self.add(method, path, {"message": "boom"}, status=status)

    def request(self, method, url, json=None, timeout=None, verify=True):
        path = url[len(BASE_URL):]
        self.calls.append((method, path, json))
        status, body, exc = self.routes.get((method, path), (404, None, None))
        if exc is not None:
            raise exc
        r = requests.Response()
        r.status_code = status
        r.url = url
        r._content = b"" if body is None else jsonlib.dumps(body).encode()
        return r

    def calls_to(self, method, path=None):
        return [c for c in self.calls if c[0] == method and (path is None or c[1] == path)]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def backend(session):
    """A fake backend holding the sample collections."""
    session.add("GET", "/Customer", CUSTOMERS)
    session.add("GET", "/Table", TABLES)
    session.add("GET", "/TimeSlot", TIME_SLOTS)
    session.add("GET", "/Booking", BOOKINGS)
    session.add("GET", "/Booking/customer/3", [BOOKINGS[0]])
    return session


@pytest.fixture
def api(session):
    return ReservationApiClient(BASE_URL, session=session)


@pytest.fixture
def notes():
    return []


@pytest.fixture
def notify(notes):
    return notes.append


@pytest.fixture
def app(api):
    return create_app({"TESTING": True, "SECRET_KEY": "test"}, api=api)


@pytest.fixture
def client(app):
    return app.test_client()
