"""
Events service routes: create, read, update and delete events.

Only the owner of an event may change or remove it; reads are public.
"""

import logging
from typing import Tuple

import psycopg2
from flask import Blueprint, request, jsonify, Response

from event_api.auth_service.middleware import login_required
from event_api.context import get_services, get_user_from_context
from event_api.database.entities import Event
from event_api.errors import Forbidden, InternalError, NotFound
from event_api.validation import EVENT_RULES, bind, parse_id

events_bp = Blueprint("events", __name__)


@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


def load_event(event_id: int) -> Event:
    """
    Fetch an event or fail the request.

    Raises:
        NotFound: If no event has this id.
        InternalError: On a database error.
    """
    try:
        event = get_services().models.events.get(event_id)
    except psycopg2.Error:
        logging.exception(f"[Events] Failed to retrieve event {event_id}")
        raise InternalError("Failed to retrieve event")

    if event is None:
        raise NotFound("Event not found")
    return event


def require_owner(event: Event, message: str) -> None:
    if event.owner_id != get_user_from_context().id:
        raise Forbidden(message)


@events_bp.route("", methods=["POST"])
@login_required
def create_event() -> Tuple[Response, int]:
    """
    Create an event owned by the caller.

    Expects JSON with name (3-100 chars), description (10-150 chars),
    date (YYYY-MM-DD) and location (3+ chars). Any ``ownerId`` or ``id``
    in the body is ignored.

    Returns:
        201: The created event.
        400: Validation error.
        401: Missing or invalid token.
        500: Database error.
    """
    data = bind(request.get_json(silent=True), EVENT_RULES)
    event = Event(owner_id=get_user_from_context().id, **data)

    try:
        get_services().models.events.insert(event)
    except psycopg2.Error:
        logging.exception("[Events] Failed to create event")
        raise InternalError("Failed to create event")

    return jsonify(event.to_dict()), 201


@events_bp.route("", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """Return every event ordered by id."""
    try:
        events = get_services().models.events.get_all()
    except psycopg2.Error:
        logging.exception("[Events] Failed to list events")
        raise InternalError("Failed to retrieve events")

    return jsonify([e.to_dict() for e in events]), 200


@events_bp.route("/<event_id>", methods=["GET"])
def get_event(event_id: str) -> Tuple[Response, int]:
    """
    Get a single event by ID.

    Returns:
        200: Event object.
        400: Non-numeric id.
        404: Event not found.
    """
    event = load_event(parse_id(event_id, "event"))
    return jsonify(event.to_dict()), 200


@events_bp.route("/<event_id>", methods=["PUT"])
@login_required
def update_event(event_id: str) -> Tuple[Response, int]:
    """
    Replace an event's name, description, date and location.

    The ownership check runs before the body is bound, and a 403 ends the
    request without touching the stored row.

    Returns:
        200: The updated event.
        400: Invalid id or body.
        403: Caller is not the owner.
        404: Event not found.
    """
    existing = load_event(parse_id(event_id, "event"))
    require_owner(existing, "You are not authorized to update this event")

    data = bind(request.get_json(silent=True), EVENT_RULES)
    updated = Event(id=existing.id, owner_id=existing.owner_id, **data)

    try:
        get_services().models.events.update(updated)
    except psycopg2.Error:
        logging.exception(f"[Events] Failed to update event {existing.id}")
        raise InternalError("Failed to update event")

    return jsonify(updated.to_dict()), 200


@events_bp.route("/<event_id>", methods=["DELETE"])
@login_required
def delete_event(event_id: str) -> Tuple[str, int]:
    """
    Delete an event owned by the caller.

    Returns:
        204: Empty body.
        400: Invalid id.
        403: Caller is not the owner.
        404: Event not found.
    """
    existing = load_event(parse_id(event_id, "event"))
    require_owner(existing, "You are not authorized to delete this event")

    try:
        get_services().models.events.delete(existing.id)
    except psycopg2.Error:
        logging.exception(f"[Events] Failed to delete event {existing.id}")
        raise InternalError("Failed to delete event")

    return "", 204
