"""
Attendee routes: link users to events and list those links.

Adding or removing an attendee is reserved for the event owner; both
listings are public.
"""

import logging
from typing import Tuple

import psycopg2
from flask import Blueprint, request, jsonify, Response

from event_api.auth_service.middleware import login_required
from event_api.context import get_services
from event_api.database.db_connection import DuplicateRecord
from event_api.database.entities import Attendee
from event_api.errors import Conflict, InternalError, NotFound
from event_api.events_service.routes import load_event, require_owner
from event_api.validation import parse_id

attendees_bp = Blueprint("attendees", __name__)


@attendees_bp.before_request
def before_request() -> None:
    logging.info(f"[Attendees] Incoming {request.method} {request.path}")


@attendees_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Attendees] Response {response.status}")
    return response


@attendees_bp.route("/events/<event_id>/attendees/<user_id>", methods=["POST"])
@login_required
def add_attendee_to_event(event_id: str, user_id: str) -> Tuple[Response, int]:
    """
    Add a user to an event's attendee list.

    Returns:
        201: {"id", "eventId", "userId"}
        400: Invalid event or user id.
        403: Caller does not own the event.
        404: Event or user not found.
        409: The user already attends the event.
        500: Database error.
    """
    event_pk = parse_id(event_id, "event")
    user_pk = parse_id(user_id, "user")
    models = get_services().models

    event = load_event(event_pk)

    try:
        user_to_add = models.users.get(user_pk)
    except psycopg2.Error:
        logging.exception(f"[Attendees] Failed to retrieve user {user_pk}")
        raise InternalError("Failed to retrieve user")
    if user_to_add is None:
        raise NotFound("User not found")

    require_owner(event, "You are not authorized to add an attendee")

    try:
        existing = models.attendees.get_by_event_and_attendee(event.id, user_to_add.id)
    except psycopg2.Error:
        logging.exception("[Attendees] Failed to retrieve attendee")
        raise InternalError("Failed to retrieve attendee")
    if existing is not None:
        raise Conflict("Attendee already exists")

    attendee = Attendee(event_id=event.id, user_id=user_to_add.id)
    try:
        models.attendees.insert(attendee)
    except DuplicateRecord:
        raise Conflict("Attendee already exists")
    except psycopg2.Error:
        logging.exception("[Attendees] Failed to add attendee")
        raise InternalError("Failed to add attendee")

    return jsonify(attendee.to_dict()), 201


@attendees_bp.route("/events/<event_id>/attendees", methods=["GET"])
def get_attendees_for_event(event_id: str) -> Tuple[Response, int]:
    """Return the public profile of every user attending the event."""
    event_pk = parse_id(event_id, "event")

    try:
        users = get_services().models.attendees.get_attendees_by_event(event_pk)
    except psycopg2.Error:
        logging.exception(f"[Attendees] Failed to list attendees of event {event_pk}")
        raise InternalError("Failed to retrieve attendees for event")

    return jsonify([u.public().to_dict() for u in users]), 200


@attendees_bp.route("/events/<event_id>/attendees/<user_id>", methods=["DELETE"])
@login_required
def delete_attendee_from_event(event_id: str, user_id: str) -> Tuple[str, int]:
    """
    Remove a user from an event's attendee list.

    Removing a user who is not attending still answers 204.

    Returns:
        204: Empty body.
        400: Invalid event or user id.
        403: Caller does not own the event.
        404: Event not found.
    """
    event_pk = parse_id(event_id, "event")
    user_pk = parse_id(user_id, "user")

    event = load_event(event_pk)
    require_owner(event, "You are not authorized to delete an attendee from event")

    try:
        get_services().models.attendees.delete(user_pk, event.id)
    except psycopg2.Error:
        logging.exception("[Attendees] Failed to delete attendee")
        raise InternalError("Failed to delete attendee")

    return "", 204


@attendees_bp.route("/attendees/<user_id>/events", methods=["GET"])
def get_events_by_attendee(user_id: str) -> Tuple[Response, int]:
    """Return every event the given user attends."""
    user_pk = parse_id(user_id, "attendee")

    try:
        events = get_services().models.attendees.get_events_by_attendee(user_pk)
    except psycopg2.Error:
        logging.exception(f"[Attendees] Failed to list events for user {user_pk}")
        raise InternalError("Failed to get events")

    return jsonify([e.to_dict() for e in events]), 200
