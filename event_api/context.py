"""
Per-application services and per-request context helpers.

The app factory stores one ``Services`` object on ``app.extensions``;
handlers reach it through ``current_app`` instead of module globals.
"""

from dataclasses import dataclass

from flask import current_app, g

from event_api.auth_service.credentials import CredentialStore
from event_api.database.entities import User
from event_api.database.models import Models
from event_api.errors import Unauthorized

EXTENSION_KEY = "event_api"


@dataclass
class Services:
    models: Models
    credentials: CredentialStore


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]


def get_user_from_context() -> User:
    """
    Return the user attached by ``login_required``.

    Raises:
        Unauthorized: If the current request was never authenticated.
    """
    user = g.get("user")
    if not isinstance(user, User):
        raise Unauthorized("authentication required")
    return user
