"""
Bearer token authentication for protected routes.
"""

import logging
from functools import wraps
from typing import Any, Callable

import psycopg2
from flask import g, request

from event_api.auth_service.credentials import InvalidToken, TokenExpired
from event_api.context import get_services
from event_api.errors import InternalError, Unauthorized


def bearer_token() -> str:
    """
    Extract the token from ``Authorization: Bearer <token>``.

    Raises:
        Unauthorized: If the header is absent or uses another scheme.
    """
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise Unauthorized("missing token")

    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise Unauthorized("missing token")
    return token


def authenticate() -> None:
    """Verify the bearer token and attach the matching user to ``g.user``."""
    services = get_services()
    token = bearer_token()

    try:
        user_id = services.credentials.verify_token(token)
    except TokenExpired:
        raise Unauthorized("token expired")
    except InvalidToken:
        raise Unauthorized("invalid token")

    try:
        user = services.models.users.get(user_id)
    except psycopg2.Error:
        logging.exception(f"[Auth] Failed to load user {user_id} for token")
        raise InternalError("Something went wrong")

    if user is None:
        raise Unauthorized("invalid token")

    g.user = user


def login_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Reject the request with 401 unless it carries a valid bearer token."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        authenticate()
        return view(*args, **kwargs)

    return wrapper
