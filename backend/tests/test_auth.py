"""API tests for sign-up, sign-in and sign-out."""
from __future__ import annotations

from sqlmodel import select

from profiles_api.models import AuthSession, Gender, Profile, User

from conftest import SIGN_UP_BODY


def _credentials(**overrides):
    body = {"email": SIGN_UP_BODY["email"], "password": SIGN_UP_BODY["password"]}
    body.update(overrides)
    return body


# ─────────────────────────────────────────────────────────────
# Sign-up
# ─────────────────────────────────────────────────────────────


class TestSignUp:
    def test_creates_user_and_profile(self, client, db):
        resp = client.post("/api/sign-up", json=SIGN_UP_BODY)

        assert resp.status_code == 201
        assert resp.json() == {"message": "Sign-up completed"}

        users = db.exec(select(User)).all()
        profiles = db.exec(select(Profile)).all()
        assert len(users) == 1
        assert len(profiles) == 1
        assert profiles[0].user_id == users[0].id
        assert profiles[0].name == "Kim"
        assert profiles[0].age == 20
        assert profiles[0].profile_image == "u"

    def test_gender_stored_upper_case(self, client, db):
        client.post("/api/sign-up", json={**SIGN_UP_BODY, "gender": "female"})

        profile = db.exec(select(Profile)).one()
        assert profile.gender == Gender.FEMALE
        assert profile.gender.value == "FEMALE"

    def test_password_is_not_stored_in_clear(self, client, db):
        client.post("/api/sign-up", json=SIGN_UP_BODY)

        user = db.exec(select(User)).one()
        assert user.password_hash != SIGN_UP_BODY["password"]

    def test_response_has_no_sensitive_data(self, client):
        resp = client.post("/api/sign-up", json=SIGN_UP_BODY)
        body = resp.text
        assert SIGN_UP_BODY["password"] not in body
        assert "password" not in resp.json()

    def test_duplicate_email_conflicts(self, client, db):
        assert client.post("/api/sign-up", json=SIGN_UP_BODY).status_code == 201

        resp = client.post("/api/sign-up", json={**SIGN_UP_BODY, "name": "Lee"})

        assert resp.status_code == 409
        assert resp.json()["detail"] == "Email already exists"
        assert len(db.exec(select(User)).all()) == 1
        assert len(db.exec(select(Profile)).all()) == 1

    def test_unknown_gender_rejected(self, client, db):
        resp = client.post("/api/sign-up", json={**SIGN_UP_BODY, "gender": "other"})

        assert resp.status_code == 422
        assert db.exec(select(User)).all() == []

    def test_missing_fields_rejected(self, client):
        body = dict(SIGN_UP_BODY)
        body.pop("name")
        assert client.post("/api/sign-up", json=body).status_code == 422

    def test_invalid_email_rejected(self, client):
        resp = client.post("/api/sign-up", json={**SIGN_UP_BODY, "email": "not-an-email"})
        assert resp.status_code == 422


# ─────────────────────────────────────────────────────────────
# Sign-in
# ─────────────────────────────────────────────────────────────


class TestSignIn:
    def test_unknown_email_unauthorized(self, client, db):
        resp = client.post("/api/sign-in", json=_credentials(email="nobody@x.com"))

        assert resp.status_code == 401
        assert resp.json()["detail"] == "Email does not exist"
        assert "session_id" not in resp.cookies
        assert db.exec(select(AuthSession)).all() == []

    def test_wrong_password_unauthorized(self, client, db):
        client.post("/api/sign-up", json=SIGN_UP_BODY)

        resp = client.post("/api/sign-in", json=_credentials(password="wrong-pw"))

        assert resp.status_code == 401
        assert resp.json()["detail"] == "Password does not match"
        assert "session_id" not in resp.cookies
        assert db.exec(select(AuthSession)).all() == []

    def test_long_wrong_password_unauthorized(self, client, db):
        client.post("/api/sign-up", json=SIGN_UP_BODY)

        resp = client.post("/api/sign-in", json=_credentials(password="x" * 80))

        assert resp.status_code == 401
        assert resp.json()["detail"] == "Password does not match"
        assert db.exec(select(AuthSession)).all() == []

    def test_malformed_email_unauthorized(self, client, db):
        resp = client.post("/api/sign-in", json=_credentials(email="not-an-email"))

        assert resp.status_code == 401
        assert resp.json()["detail"] == "Email does not exist"
        assert db.exec(select(AuthSession)).all() == []

    def test_short_password_accepted_at_sign_up(self, client):
        resp = client.post("/api/sign-up", json={**SIGN_UP_BODY, "password": "pw"})
        assert resp.status_code == 201

    def test_success_sets_cookie_and_session(self, client, db):
        client.post("/api/sign-up", json=SIGN_UP_BODY)

        resp = client.post("/api/sign-in", json=_credentials())

        assert resp.status_code == 200
        assert resp.json() == {"message": "Signed in"}
        assert "session_id" in resp.cookies

        set_cookie = resp.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "max-age=3600" in set_cookie

        user = db.exec(select(User)).one()
        sessions = db.exec(select(AuthSession)).all()
        assert len(sessions) == 1
        assert sessions[0].user_id == user.id

    def test_cookie_does_not_expose_session_id(self, client, db):
        client.post("/api/sign-up", json=SIGN_UP_BODY)
        resp = client.post("/api/sign-in", json=_credentials())

        stored = db.exec(select(AuthSession)).one()
        assert resp.cookies["session_id"] != stored.id

    def test_authenticated_call_succeeds_after_sign_in(self, signed_in_client):
        resp = signed_in_client.get("/api/users")
        assert resp.status_code == 200


# ─────────────────────────────────────────────────────────────
# Sign-out
# ─────────────────────────────────────────────────────────────


class TestSignOut:
    def test_sign_out_ends_session(self, signed_in_client, db):
        resp = signed_in_client.post("/api/sign-out")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Signed out"}
        assert db.exec(select(AuthSession)).all() == []
        assert signed_in_client.get("/api/users").status_code == 401

    def test_sign_out_requires_session(self, client):
        assert client.post("/api/sign-out").status_code == 401
