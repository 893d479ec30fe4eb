import pytest
from flask import g

from event_api.auth_service.middleware import authenticate, bearer_token
from event_api.context import get_user_from_context
from event_api.errors import Unauthorized


def test_bearer_token_extracted(app):
    with app.test_request_context(headers={"Authorization": "Bearer abc.def.ghi"}):
        assert bearer_token() == "abc.def.ghi"


@pytest.mark.parametrize("header", [None, "InvalidFormat", "Bearer ", "Basic dXNlcjpwYXNz"])
def test_bearer_token_missing(app, header):
    headers = {"Authorization": header} if header is not None else {}
    with app.test_request_context(headers=headers):
        with pytest.raises(Unauthorized, match="missing token"):
            bearer_token()


def test_authenticate_attaches_user(app, models, credentials, register):
    user = register()
    token = credentials.issue_token(user["id"])

    with app.test_request_context(headers={"Authorization": f"Bearer {token}"}):
        authenticate()
        assert g.user is models.users.get(user["id"])
        assert get_user_from_context().email == "alice@example.com"


def test_get_user_from_context_without_login(app):
    with app.test_request_context():
        with pytest.raises(Unauthorized):
            get_user_from_context()
