"""
Authentication route handlers.

Provides routes for:
- User registration
- User login
- Profile retrieval (/me)

Hashing and token signing are delegated to the credential store held by
the application's ``Services``.
"""

import logging
from typing import Tuple

import psycopg2
from flask import Blueprint, request, jsonify, Response

from event_api.auth_service.middleware import login_required
from event_api.context import get_services, get_user_from_context
from event_api.database.db_connection import DuplicateRecord
from event_api.database.entities import User
from event_api.errors import Conflict, InternalError, Unauthorized
from event_api.validation import LOGIN_RULES, REGISTER_RULES, bind

auth_bp = Blueprint("auth", __name__)

INVALID_CREDENTIALS = "Invalid email or password"


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Auth] Response {response.status}")
    return response


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user.

    Expects a JSON body with:
    - email (str): Unique email address, stored lowercase.
    - password (str): Minimum 8 characters.
    - name (str): Minimum 2 characters.

    Returns:
        201: The created user (id, email, name). The hash is never echoed.
        400: Missing or invalid fields.
        409: Email already registered.
        500: Hashing or database failure.
    """
    data = bind(request.get_json(silent=True), REGISTER_RULES)
    services = get_services()

    try:
        pw_hash = services.credentials.hash(data["password"])
    except Exception:
        logging.exception("[Auth] Password hashing failed")
        raise InternalError("Something went wrong")

    user = User(email=data["email"], password=pw_hash, name=data["name"])

    try:
        services.models.users.insert(user)
    except DuplicateRecord:
        raise Conflict("Email already exists")
    except psycopg2.Error:
        logging.exception("[Auth] Failed to insert user")
        raise InternalError("Could not create user")

    logging.info(f"[Auth] Registered user {user.id}")
    return jsonify(user.public().to_dict()), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user and return a bearer token.

    An unknown email and a wrong password produce the same 401 body so the
    endpoint cannot be used to discover registered addresses.

    Returns:
        200: {"token": <jwt>}
        400: Missing or malformed credentials.
        401: Invalid email or password.
        500: Database or signing error.
    """
    data = bind(request.get_json(silent=True), LOGIN_RULES)
    services = get_services()

    try:
        user = services.models.users.get_by_email(data["email"])
    except psycopg2.Error:
        logging.exception("[Auth] Failed to look up user by email")
        raise InternalError("Something went wrong")

    if user is None:
        services.credentials.verify_missing(data["password"])
        raise Unauthorized(INVALID_CREDENTIALS)

    if not services.credentials.verify(data["password"], user.password):
        raise Unauthorized(INVALID_CREDENTIALS)

    try:
        token = services.credentials.issue_token(user.id)
    except Exception:
        logging.exception("[Auth] Token signing failed")
        raise InternalError("Error generating token")

    return jsonify({"token": token}), 200


# --- GET CURRENT USER ---
@auth_bp.route("/me", methods=["GET"])
@login_required
def get_current_user() -> Tuple[Response, int]:
    """
    Return the authenticated caller's public profile.

    Requires Authorization header: Bearer <token>
    """
    return jsonify(get_user_from_context().public().to_dict()), 200
