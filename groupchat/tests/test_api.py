from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus

import pytest
from flask import Flask
from flask.testing import FlaskClient

from groupchat.domain.users.entities import User
from groupchat.interfaces.http.controllers.misc_controller import MiscController
from groupchat.shared.errors import InfrastructureError

ADMIN_USERNAME = "superadmin"


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": token}


@pytest.fixture()
def create_user(client: FlaskClient, admin_token: str) -> Callable[..., dict]:
    def _create(username: str, password: str = "pw", is_admin: bool = False) -> dict:
        response = client.post(
            "/admin/createUser",
            json={"username": username, "password": password, "isAdmin": is_admin},
            headers=_auth(admin_token),
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["user"]

    return _create


@pytest.fixture()
def alice(create_user, login_as) -> tuple[dict, str]:
    user = create_user("alice", "pw1")
    return user, login_as("alice", "pw1")


@pytest.fixture()
def bob(create_user, login_as) -> tuple[dict, str]:
    user = create_user("bob", "pw2")
    return user, login_as("bob", "pw2")


def _create_group(client: FlaskClient, token: str, name: str) -> dict:
    response = client.post("/groups/createGroup", json={"groupName": name}, headers=_auth(token))
    assert response.status_code == 201, response.get_json()
    return response.get_json()["group"]


def test_health(client: FlaskClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}


def test_login_success_returns_token(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": ADMIN_USERNAME, "password": "123456"})

    body = response.get_json()
    assert response.status_code == 200
    assert body["message"] == "Login successful"
    assert body["token"]


@pytest.mark.parametrize(
    "credentials",
    [
        {"username": ADMIN_USERNAME, "password": "wrong"},
        {"username": "nobody", "password": "123456"},
    ],
)
def test_login_bad_credentials(client: FlaskClient, credentials: dict) -> None:
    response = client.post("/login", json=credentials)

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"


def test_login_missing_fields(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": ADMIN_USERNAME})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Username and password are required"


def test_logout_requires_token(client: FlaskClient, admin_token: str) -> None:
    assert client.post("/logout").status_code == 401

    response = client.post("/logout", headers=_auth(admin_token))
    assert response.status_code == 200
    assert response.get_json() == {"message": "Logout successful"}


def test_bearer_prefix_is_accepted(client: FlaskClient, admin_token: str) -> None:
    response = client.post("/logout", headers={"Authorization": f"Bearer {admin_token}"})
    assert response.status_code == 200


def test_invalid_token_is_unauthorized(client: FlaskClient) -> None:
    response = client.post("/logout", headers=_auth("not-a-token"))

    assert response.status_code == 401
    assert response.get_json()["message"] == "Unauthorized"


def test_admin_creates_user(client: FlaskClient, admin_token: str) -> None:
    response = client.post(
        "/admin/createUser",
        json={"username": "alice", "password": "pw1"},
        headers=_auth(admin_token),
    )

    body = response.get_json()
    assert response.status_code == 201
    assert body["message"] == "User created successfully"
    assert body["user"]["username"] == "alice"
    assert body["user"]["isAdmin"] is False
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


def test_create_user_duplicate_username(client: FlaskClient, admin_token: str, create_user) -> None:
    create_user("alice")

    response = client.post(
        "/admin/createUser",
        json={"username": "alice", "password": "x"},
        headers=_auth(admin_token),
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Username is already taken"


def test_create_user_missing_fields(client: FlaskClient, admin_token: str) -> None:
    response = client.post(
        "/admin/createUser", json={"username": "alice"}, headers=_auth(admin_token)
    )
    assert response.status_code == 400


def test_non_admin_cannot_create_user(client: FlaskClient, alice) -> None:
    _, token = alice

    response = client.post(
        "/admin/createUser",
        json={"username": "mallory", "password": "x"},
        headers=_auth(token),
    )
    assert response.status_code == 403
    assert response.get_json()["message"] == "Permission denied"


def test_create_user_without_token(client: FlaskClient) -> None:
    response = client.post("/admin/createUser", json={"username": "a", "password": "b"})
    assert response.status_code == 401


def test_admin_edits_user(client: FlaskClient, admin_token: str, create_user, login_as) -> None:
    user = create_user("alice", "pw1")

    response = client.put(
        f"/admin/editUser/{user['id']}",
        json={"username": "alicia", "password": "pw9", "isAdmin": True},
        headers=_auth(admin_token),
    )

    body = response.get_json()
    assert response.status_code == 200
    assert body["message"] == "User updated successfully"
    assert body["user"] == {"id": user["id"], "username": "alicia", "isAdmin": True}
    assert login_as("alicia", "pw9")
    assert client.post("/login", json={"username": "alice", "password": "pw1"}).status_code == 401


def test_edit_unknown_user(client: FlaskClient, admin_token: str) -> None:
    response = client.put(
        "/admin/editUser/doesnotexist",
        json={"username": "x", "password": "y"},
        headers=_auth(admin_token),
    )
    assert response.status_code == 404
    assert response.get_json()["message"] == "User not found"


def test_group_lifecycle(client: FlaskClient, alice, bob) -> None:
    alice_user, alice_token = alice
    bob_user, bob_token = bob

    group = _create_group(client, alice_token, "G1")
    assert group["name"] == "G1"
    assert group["members"] == [alice_user["id"]]
    assert group["messages"] == []

    added = client.post(
        f"/groups/addMembers/{group['id']}",
        json={"userIds": [bob_user["id"], alice_user["id"]]},
        headers=_auth(alice_token),
    )
    assert added.status_code == 200
    assert added.get_json()["message"] == "Members added successfully"
    assert added.get_json()["group"]["members"] == [alice_user["id"], bob_user["id"]]

    sent = client.post(
        f"/groups/sendMessage/{group['id']}",
        json={"message": "hi"},
        headers=_auth(bob_token),
    )
    body = sent.get_json()
    assert sent.status_code == 200
    assert body["sentBy"] == "bob"
    assert body["content"] == "hi"
    message = body["group"]["messages"][-1]
    assert message["sender"] == bob_user["id"]
    assert message["likes"] == []
    assert "createdAt" in message

    path = f"/groups/likeMessage/{group['id']}/{message['id']}"
    first = client.post(path, headers=_auth(alice_token)).get_json()
    assert first["liked"] is True
    assert first["message"] == "Message liked"
    assert first["likedBy"] == [alice_user["id"]]

    second = client.post(path, headers=_auth(alice_token)).get_json()
    assert second["liked"] is False
    assert second["message"] == "Message unliked"
    assert second["likedBy"] == []

    forbidden = client.delete(f"/groups/deleteGroup/{group['id']}", headers=_auth(bob_token))
    assert forbidden.status_code == 403

    deleted = client.delete(f"/groups/deleteGroup/{group['id']}", headers=_auth(alice_token))
    assert deleted.status_code == 200
    assert deleted.get_json() == {"message": "Group deleted successfully"}

    gone = client.delete(f"/groups/deleteGroup/{group['id']}", headers=_auth(alice_token))
    assert gone.status_code == 404


def test_send_message_echoes_sender(client: FlaskClient, alice) -> None:
    _, token = alice
    group = _create_group(client, token, "G1")

    response = client.post(
        f"/groups/sendMessage/{group['id']}", json={"message": "hi"}, headers=_auth(token)
    )
    assert response.status_code == 200
    assert response.get_json()["sentBy"] == "alice"


def test_send_message_requires_content(client: FlaskClient, alice) -> None:
    _, token = alice
    group = _create_group(client, token, "G1")

    response = client.post(f"/groups/sendMessage/{group['id']}", json={}, headers=_auth(token))
    assert response.status_code == 400
    assert response.get_json()["message"] == "Message content is required"


def test_non_member_cannot_send_or_add(client: FlaskClient, alice, bob) -> None:
    _, alice_token = alice
    bob_user, bob_token = bob
    group = _create_group(client, alice_token, "G1")

    add = client.post(
        f"/groups/addMembers/{group['id']}",
        json={"userIds": [bob_user["id"]]},
        headers=_auth(bob_token),
    )
    assert add.status_code == 403

    send = client.post(
        f"/groups/sendMessage/{group['id']}", json={"message": "hi"}, headers=_auth(bob_token)
    )
    assert send.status_code == 403


def test_add_unknown_member(client: FlaskClient, alice) -> None:
    _, token = alice
    group = _create_group(client, token, "G1")

    response = client.post(
        f"/groups/addMembers/{group['id']}", json={"userIds": ["ghost"]}, headers=_auth(token)
    )
    assert response.status_code == 404
    assert response.get_json()["message"] == "User not found"


def test_add_members_requires_list(client: FlaskClient, alice) -> None:
    _, token = alice
    group = _create_group(client, token, "G1")

    response = client.post(
        f"/groups/addMembers/{group['id']}", json={"userIds": "nope"}, headers=_auth(token)
    )
    assert response.status_code == 400


def test_duplicate_group_name(client: FlaskClient, alice) -> None:
    _, token = alice
    _create_group(client, token, "G1")

    response = client.post("/groups/createGroup", json={"groupName": "G1"}, headers=_auth(token))
    assert response.status_code == 400
    assert response.get_json()["message"] == "Group name is already taken"


def test_create_group_requires_name(client: FlaskClient, alice) -> None:
    _, token = alice
    response = client.post("/groups/createGroup", json={}, headers=_auth(token))
    assert response.status_code == 400


def test_admin_can_create_group(client: FlaskClient, admin_token: str) -> None:
    group = _create_group(client, admin_token, "Admins")
    assert len(group["members"]) == 1


def test_search_groups(client: FlaskClient, alice) -> None:
    _, token = alice
    _create_group(client, token, "Book Club")
    _create_group(client, token, "bookworms")
    _create_group(client, token, "Chess")

    response = client.get("/groups/searchGroup/BOOK", headers=_auth(token))
    names = sorted(group["name"] for group in response.get_json()["groups"])
    assert response.status_code == 200
    assert names == ["Book Club", "bookworms"]

    empty = client.get("/groups/searchGroup/zzz", headers=_auth(token))
    assert empty.get_json() == {"groups": []}


def test_search_requires_token(client: FlaskClient) -> None:
    assert client.get("/groups/searchGroup/x").status_code == 401


def test_like_unknown_message(client: FlaskClient, alice) -> None:
    _, token = alice
    group = _create_group(client, token, "G1")

    response = client.post(f"/groups/likeMessage/{group['id']}/nope", headers=_auth(token))
    assert response.status_code == 404
    assert response.get_json()["message"] == "Message not found"


def test_unknown_group_is_not_found(client: FlaskClient, alice) -> None:
    _, token = alice

    response = client.post(
        "/groups/sendMessage/missing", json={"message": "hi"}, headers=_auth(token)
    )
    assert response.status_code == 404
    assert response.get_json()["message"] == "Group not found"


def test_unknown_route_is_json(client: FlaskClient) -> None:
    response = client.get("/nope")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_request_id_header_is_echoed(client: FlaskClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


class _DownDatabase:
    def check(self) -> None:
        raise InfrastructureError("database_unavailable", status=HTTPStatus.SERVICE_UNAVAILABLE)


def test_health_reports_database_outage() -> None:
    app = Flask(__name__)
    app.register_blueprint(MiscController(database=_DownDatabase()).as_blueprint())

    response = app.test_client().get("/health")
    assert response.status_code == 503
    assert response.get_json() == {"ok": False, "database": "error"}


def test_add_members_checks_membership_before_user_ids(client: FlaskClient, alice, bob) -> None:
    _, alice_token = alice
    _, bob_token = bob
    group = _create_group(client, alice_token, "G1")

    response = client.post(
        f"/groups/addMembers/{group['id']}", json={"userIds": ["ghost"]}, headers=_auth(bob_token)
    )
    assert response.status_code == 403

    missing = client.post(
        "/groups/addMembers/missing", json={"userIds": ["ghost"]}, headers=_auth(bob_token)
    )
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Group not found"


def test_long_password_is_accepted(client: FlaskClient, admin_token: str, login_as) -> None:
    password = "p" * 200

    response = client.post(
        "/admin/createUser",
        json={"username": "alice", "password": password},
        headers=_auth(admin_token),
    )
    assert response.status_code == 201
    assert login_as("alice", password)


def test_overlong_username_on_create_and_edit(
    client: FlaskClient, admin_token: str, create_user
) -> None:
    created = client.post(
        "/admin/createUser",
        json={"username": "a" * 65, "password": "pw"},
        headers=_auth(admin_token),
    )
    assert created.status_code == 400
    assert created.get_json()["message"] == "Username is too long"

    user = create_user("alice")
    edited = client.put(
        f"/admin/editUser/{user['id']}",
        json={"username": "a" * 65, "password": "pw"},
        headers=_auth(admin_token),
    )
    assert edited.status_code == 400
    assert edited.get_json()["message"] == "Username is too long"


def test_login_with_overlong_credentials_is_invalid(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": "u" * 80, "password": "p" * 300})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"


def test_overlong_group_name(client: FlaskClient, alice) -> None:
    _, token = alice

    response = client.post(
        "/groups/createGroup", json={"groupName": "g" * 129}, headers=_auth(token)
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Group name is too long"


def test_token_for_removed_account_is_unauthorized(
    client: FlaskClient, app: Flask, alice
) -> None:
    _, alice_token = alice
    group = _create_group(client, alice_token, "G1")
    sent = client.post(
        f"/groups/sendMessage/{group['id']}", json={"message": "hi"}, headers=_auth(alice_token)
    )
    message_id = sent.get_json()["group"]["messages"][-1]["id"]
    tokens = app.extensions["groupchat.container"].token_service
    stale = tokens.issue(User(id="f" * 32, username="ghost", password_hash=""))

    created = client.post(
        "/groups/createGroup", json={"groupName": "Fresh"}, headers=_auth(stale)
    )
    assert created.status_code == 401
    assert created.get_json()["message"] == "Unauthorized"

    liked = client.post(
        f"/groups/likeMessage/{group['id']}/{message_id}", headers=_auth(stale)
    )
    assert liked.status_code == 401

    fresh = client.post(
        "/groups/createGroup", json={"groupName": "Fresh"}, headers=_auth(alice_token)
    )
    assert fresh.status_code == 201
