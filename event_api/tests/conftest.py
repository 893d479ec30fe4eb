import pytest
from argon2 import PasswordHasher

from event_api.auth_service.credentials import CredentialStore
from event_api.config import Config
from event_api.context import Services
from event_api.database.db_connection import DuplicateRecord
from event_api.database.models import Models
from event_api.gateway.server import create_app

TEST_SECRET = "test_secret"


class FakeUsers:
    def __init__(self):
        self.rows = {}

    def insert(self, user):
        if any(u.email == user.email for u in self.rows.values()):
            raise DuplicateRecord(user.email)
        user.id = len(self.rows) + 1
        self.rows[user.id] = user
        return user

    def get(self, user_id):
        return self.rows.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)


class FakeEvents:
    def __init__(self):
        self.rows = {}
        self.next_id = 1

    def insert(self, event):
        event.id = self.next_id
        self.next_id += 1
        self.rows[event.id] = event
        return event

    def get_all(self):
        return [self.rows[k] for k in sorted(self.rows)]

    def get(self, event_id):
        return self.rows.get(event_id)

    def update(self, event):
        self.rows[event.id] = event

    def delete(self, event_id):
        self.rows.pop(event_id, None)


class FakeAttendees:
    def __init__(self, users, events):
        self.users = users
        self.events = events
        self.rows = []

    def insert(self, attendee):
        if self.get_by_event_and_attendee(attendee.event_id, attendee.user_id):
            raise DuplicateRecord("attendee")
        attendee.id = len(self.rows) + 1
        self.rows.append(attendee)
        return attendee

    def get_by_event_and_attendee(self, event_id, user_id):
        return next(
            (a for a in self.rows if a.event_id == event_id and a.user_id == user_id),
            None,
        )

    def get_attendees_by_event(self, event_id):
        return [self.users.get(a.user_id) for a in self.rows if a.event_id == event_id]

    def delete(self, user_id, event_id):
        self.rows = [
            a for a in self.rows if not (a.event_id == event_id and a.user_id == user_id)
        ]

    def get_events_by_attendee(self, user_id):
        return [self.events.get(a.event_id) for a in self.rows if a.user_id == user_id]


@pytest.fixture
def models():
    users = FakeUsers()
    events = FakeEvents()
    return Models(users=users, events=events, attendees=FakeAttendees(users, events))


@pytest.fixture
def credentials():
    # Cheap Argon2 parameters keep the suite fast.
    return CredentialStore(
        TEST_SECRET,
        hasher=PasswordHasher(time_cost=1, memory_cost=8, parallelism=1),
    )


@pytest.fixture
def app(models, credentials):
    config = Config(jwt_secret=TEST_SECRET)
    app = create_app(config, services=Services(models=models, credentials=credentials))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a user through the API and return the response JSON."""
    def _register(email="alice@example.com", password="password123", name="Alice"):
        response = client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _register


@pytest.fixture
def login(client):
    """Log in and return ready-to-use Authorization headers."""
    def _login(email="alice@example.com", password="password123"):
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return {"Authorization": f"Bearer {response.get_json()['token']}"}

    return _login


@pytest.fixture
def event_payload():
    return {
        "name": "Python Meetup",
        "description": "Monthly gathering of local Python developers",
        "date": "2026-11-20",
        "location": "Community Hall",
    }
