from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from groupchat.app import create_app
from groupchat.infrastructure.db import Database
from groupchat.shared.config.settings import AppConfig, AuthConfig, DatabaseConfig

ADMIN_USERNAME = "superadmin"
ADMIN_PASSWORD = "123456"
JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(url="sqlite://"),  # type: ignore[call-arg]
        auth=AuthConfig(  # type: ignore[call-arg]
            jwt_secret=JWT_SECRET,
            bootstrap_admin_username=ADMIN_USERNAME,
            bootstrap_admin_password=ADMIN_PASSWORD,
        ),
    )


@pytest.fixture()
def database(config: AppConfig) -> Iterator[Database]:
    db = Database(config.database)
    db.init_db()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture()
def app(config: AppConfig, database: Database) -> Flask:
    return create_app(config, database)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def login_as(client: FlaskClient) -> Callable[[str, str], str]:
    def _login(username: str, password: str) -> str:
        response = client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.get_json()
        return response.get_json()["token"]

    return _login


@pytest.fixture()
def admin_token(login_as: Callable[[str, str], str]) -> str:
    return login_as(ADMIN_USERNAME, ADMIN_PASSWORD)
