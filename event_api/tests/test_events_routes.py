import psycopg2
import pytest


@pytest.fixture
def owner_headers(register, login):
    register()
    return login()


@pytest.fixture
def other_headers(register, login):
    register(email="bob@example.com", name="Bob")
    return login(email="bob@example.com")


@pytest.fixture
def event(client, owner_headers, event_payload):
    response = client.post("/events", json=event_payload, headers=owner_headers)
    assert response.status_code == 201
    return response.get_json()


def test_create_event_success(client, owner_headers, event_payload):
    response = client.post(
        "/events",
        json={**event_payload, "ownerId": 77, "id": 500},
        headers=owner_headers,
    )

    assert response.status_code == 201
    assert response.get_json() == {
        "id": 1,
        "ownerId": 1,
        "name": "Python Meetup",
        "description": "Monthly gathering of local Python developers",
        "date": "2026-11-20",
        "location": "Community Hall",
    }


def test_create_event_requires_token(client, event_payload):
    response = client.post("/events", json=event_payload)
    assert response.status_code == 401


def test_create_event_invalid_input(client, owner_headers):
    response = client.post("/events", json={"name": "New Event"}, headers=owner_headers)
    assert response.status_code == 400
    assert response.get_json()["error"] == "description is required"


def test_create_event_database_error(client, owner_headers, event_payload, models, mocker):
    mocker.patch.object(models.events, "insert", side_effect=psycopg2.OperationalError("down"))

    response = client.post("/events", json=event_payload, headers=owner_headers)

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to create event"


def test_list_events(client, event):
    response = client.get("/events")
    assert response.status_code == 200
    assert response.get_json() == [event]


def test_list_events_empty(client):
    response = client.get("/events")
    assert response.status_code == 200
    assert response.get_json() == []


def test_get_event_detail(client, event):
    response = client.get(f"/events/{event['id']}")
    assert response.status_code == 200
    assert response.get_json()["name"] == "Python Meetup"


def test_get_event_not_found(client):
    response = client.get("/events/42")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Event not found"


def test_get_event_invalid_id(client):
    response = client.get("/events/abc")
    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid event ID"


def test_update_event(client, event, owner_headers, event_payload):
    payload = {**event_payload, "name": "Updated Meetup", "date": "2026-12-01"}

    response = client.put(f"/events/{event['id']}", json=payload, headers=owner_headers)

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "Updated Meetup"
    assert data["date"] == "2026-12-01"
    assert data["id"] == event["id"]
    assert data["ownerId"] == event["ownerId"]
    assert client.get(f"/events/{event['id']}").get_json() == data


def test_update_event_cannot_change_owner(client, event, owner_headers, event_payload):
    response = client.put(
        f"/events/{event['id']}",
        json={**event_payload, "ownerId": 2},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.get_json()["ownerId"] == event["ownerId"]


def test_update_event_forbidden_leaves_event_unchanged(client, event, other_headers, event_payload):
    response = client.put(
        f"/events/{event['id']}",
        json={**event_payload, "name": "Hijacked"},
        headers=other_headers,
    )

    assert response.status_code == 403
    assert response.get_json()["error"] == "You are not authorized to update this event"
    assert client.get(f"/events/{event['id']}").get_json() == event


def test_update_event_not_found(client, owner_headers, event_payload):
    response = client.put("/events/42", json=event_payload, headers=owner_headers)
    assert response.status_code == 404


def test_update_event_invalid_body(client, event, owner_headers):
    response = client.put(f"/events/{event['id']}", json={"name": "x"}, headers=owner_headers)
    assert response.status_code == 400
    assert client.get(f"/events/{event['id']}").get_json() == event


def test_delete_event(client, event, owner_headers):
    response = client.delete(f"/events/{event['id']}", headers=owner_headers)

    assert response.status_code == 204
    assert response.data == b""
    assert client.get(f"/events/{event['id']}").status_code == 404


def test_delete_event_forbidden_leaves_event(client, event, other_headers):
    response = client.delete(f"/events/{event['id']}", headers=other_headers)

    assert response.status_code == 403
    assert client.get(f"/events/{event['id']}").status_code == 200


def test_delete_missing_event_is_404(client, owner_headers):
    response = client.delete("/events/42", headers=owner_headers)
    assert response.status_code == 404


def test_delete_event_invalid_id(client, owner_headers):
    response = client.delete("/events/abc", headers=owner_headers)
    assert response.status_code == 400


def test_get_event_database_error(client, models, mocker):
    mocker.patch.object(models.events, "get", side_effect=psycopg2.OperationalError("down"))

    response = client.get("/events/1")

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to retrieve event"


@pytest.mark.parametrize("value", ["20261120", "2026-W47-5"])
def test_create_event_rejects_non_calendar_date_forms(client, owner_headers, event_payload, value):
    response = client.post("/events", json={**event_payload, "date": value}, headers=owner_headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "date must be a date in YYYY-MM-DD format"
    assert client.get("/events").get_json() == []


@pytest.mark.parametrize("raw_id", ["1_0", "+1", "١"])
def test_get_event_rejects_loose_integer_forms(client, event, raw_id):
    response = client.get(f"/events/{raw_id}")
    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid event ID"
