from __future__ import annotations

import pytest
from flask import Flask, g

from groupchat.domain.users.entities import Principal, User
from groupchat.infrastructure.access_control import AccessControl, token_from_request
from groupchat.infrastructure.auth.jwt_tokens import JwtTokenService
from groupchat.shared.errors import PermissionDeniedError, UnauthorizedError

SECRET = "access-control-secret-with-enough-bytes"


@pytest.fixture()
def flask_app() -> Flask:
    return Flask(__name__)


@pytest.fixture()
def tokens() -> JwtTokenService:
    return JwtTokenService(secret=SECRET)


@pytest.mark.parametrize(
    ("header", "expected"),
    [("abc.def.ghi", "abc.def.ghi"), ("Bearer abc.def.ghi", "abc.def.ghi"),
     ("bearer  abc", "abc"), ("", None)],
)
def test_token_from_request(flask_app: Flask, header: str, expected: str | None) -> None:
    headers = {"Authorization": header} if header else {}
    with flask_app.test_request_context("/", headers=headers):
        assert token_from_request() == expected


@pytest.mark.parametrize(
    ("is_admin", "allowed", "permitted"),
    [
        (True, ["admin"], True),
        (False, ["admin"], False),
        (False, ["user"], True),
        (True, ["user"], False),
        (True, ["admin", "user"], True),
        (False, ["admin", "user"], True),
    ],
)
def test_authorize_is_singular_role_membership(
    is_admin: bool, allowed: list[str], permitted: bool
) -> None:
    principal = Principal(id="u1", username="alice", is_admin=is_admin)

    if permitted:
        AccessControl.authorize(principal, allowed)
    else:
        with pytest.raises(PermissionDeniedError):
            AccessControl.authorize(principal, allowed)


def test_authenticated_sets_principal(flask_app: Flask, tokens: JwtTokenService) -> None:
    access = AccessControl(tokens)
    token = tokens.issue(User(id="u1", username="alice", password_hash="h"))

    @access.authenticated
    def view() -> str:
        return g.principal.username

    with flask_app.test_request_context("/", headers={"Authorization": token}):
        assert view() == "alice"
        assert g.user_id == "u1"


def test_missing_or_invalid_token_is_unauthorized(
    flask_app: Flask, tokens: JwtTokenService
) -> None:
    access = AccessControl(tokens)

    @access.authenticated
    def view() -> str:
        return "ok"

    with flask_app.test_request_context("/"):
        with pytest.raises(UnauthorizedError):
            view()
    with flask_app.test_request_context("/", headers={"Authorization": "garbage"}):
        with pytest.raises(UnauthorizedError):
            view()


def test_require_roles_rejects_other_role(flask_app: Flask, tokens: JwtTokenService) -> None:
    access = AccessControl(tokens)
    token = tokens.issue(User(id="u1", username="alice", password_hash="h"))

    @access.require_roles("admin")
    def view() -> str:
        return "ok"

    with flask_app.test_request_context("/", headers={"Authorization": token}):
        with pytest.raises(PermissionDeniedError):
            view()
