from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from main import create_app
from profiles_api.core.config import Settings


SIGN_UP_BODY: Dict[str, Any] = {
    "email": "a@x.com",
    "password": "pw",
    "name": "Kim",
    "age": 20,
    "gender": "male",
    "profileImage": "u",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        session_secret="test-secret",
        session_ttl_minutes=60,
        session_cookie_name="session_id",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def engine(app, client):
    # The engine only exists once the lifespan has started
    return app.state.engine


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def signed_in_client(client):
    resp = client.post("/api/sign-up", json=SIGN_UP_BODY)
    assert resp.status_code == 201, resp.text
    resp = client.post(
        "/api/sign-in",
        json={"email": SIGN_UP_BODY["email"], "password": SIGN_UP_BODY["password"]},
    )
    assert resp.status_code == 200, resp.text
    return client
