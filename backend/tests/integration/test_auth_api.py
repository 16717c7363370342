"""End-to-end tests for the ``/api/v1/auth`` endpoints through the test client."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from blog_auth.models import UserSession
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import ACCESS_SECRET, REFRESH_SECRET, bearer, forge_token

LOGIN_URL = "/api/v1/auth/login"
REFRESH_URL = "/api/v1/auth/refresh"
LOGOUT_URL = "/api/v1/auth/logout"
PROFILE_URL = "/api/v1/auth/profile"


@pytest.fixture()
def admin(session):
    return AdminFactory(password="admin123")


def _login(client, username="admin", password="admin123"):
    return client.post(LOGIN_URL, json={"username": username, "password": password})


def _session_count(session) -> int:
    return session.execute(select(func.count()).select_from(UserSession)).scalar_one()


class TestScenario:
    def test_full_admin_walkthrough(self, client, admin) -> None:
        # Login as admin → 201 with an access token
        resp = _login(client)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["access_token_expires_in"] == 900
        assert data["user"]["username"] == "admin"
        assert "password_hash" not in data["user"]

        # Wrong password → 401 "Invalid credentials"
        bad = _login(client, password="wrongpassword")
        assert bad.status_code == 401
        assert bad.mimetype == "application/problem+json"
        assert bad.get_json()["detail"] == "Invalid credentials"

        # Profile with the access token → admin
        prof = client.get(PROFILE_URL, headers=bearer(data["access_token"]))
        assert prof.status_code == 200
        assert prof.get_json()["data"]["username"] == "admin"

        # Profile without a token → 401
        anon = client.get(PROFILE_URL)
        assert anon.status_code == 401
        assert anon.get_json()["detail"] == "Unauthorized"

        # Access token where a refresh token is required → 403
        cross = client.post(REFRESH_URL, headers=bearer(data["access_token"]))
        assert cross.status_code == 403
        assert cross.get_json()["detail"] == "Invalid refresh token"


class TestLogin:
    def test_login_persists_one_hashed_session(self, client, admin, session) -> None:
        resp = _login(client)
        raw = resp.get_json()["data"]["refresh_token"]

        rows = session.execute(select(UserSession)).scalars().all()
        assert len(rows) == 1
        assert rows[0].token_hash != raw
        assert rows[0].user_id == admin.id

    def test_unknown_user_matches_wrong_password(self, client, admin) -> None:
        unknown = _login(client, username="nobody")
        wrong = _login(client, password="nope")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.get_json()["detail"] == wrong.get_json()["detail"]

    def test_failed_login_creates_no_session(self, client, admin, session) -> None:
        _login(client, password="wrongpassword")

        assert _session_count(session) == 0

    def test_inactive_user_cannot_login(self, client, session) -> None:
        UserFactory(username="dormant", password="Passw0rd!", is_active=False)

        resp = _login(client, username="dormant", password="Passw0rd!")

        assert resp.status_code == 401

    @pytest.mark.parametrize("body", [{}, {"username": "admin"}, {"password": "x"}])
    def test_missing_fields_are_unprocessable(self, client, admin, body) -> None:
        resp = client.post(LOGIN_URL, json=body)

        assert resp.status_code == 422
        assert resp.get_json()["code"] == "validation_error"

    def test_repeat_logins_use_the_committed_password(self, client, admin, session) -> None:
        session.expire_all()

        first = _login(client)
        second = _login(client)

        assert [first.status_code, second.status_code] == [201, 201]
        assert _login(client, password="Passw0rd!").status_code == 401


class TestRefresh:
    def test_refresh_via_bearer_rotates(self, client, admin, session) -> None:
        first = _login(client).get_json()["data"]

        resp = client.post(REFRESH_URL, headers=bearer(first["refresh_token"]))

        assert resp.status_code == 200
        second = resp.get_json()["data"]
        assert second["refresh_token"] != first["refresh_token"]
        assert second["user"]["username"] == "admin"
        assert _session_count(session) == 1

    def test_refresh_via_json_body(self, client, admin) -> None:
        first = _login(client).get_json()["data"]

        resp = client.post(REFRESH_URL, json={"refresh_token": first["refresh_token"]})

        assert resp.status_code == 200

    def test_replayed_token_is_forbidden(self, client, admin) -> None:
        first = _login(client).get_json()["data"]
        client.post(REFRESH_URL, headers=bearer(first["refresh_token"]))

        replay = client.post(REFRESH_URL, headers=bearer(first["refresh_token"]))

        assert replay.status_code == 403
        assert replay.get_json()["detail"] == "Invalid refresh token"

    def test_new_access_token_works(self, client, admin) -> None:
        first = _login(client).get_json()["data"]
        second = client.post(REFRESH_URL, headers=bearer(first["refresh_token"])).get_json()

        prof = client.get(PROFILE_URL, headers=bearer(second["data"]["access_token"]))

        assert prof.status_code == 200

    @pytest.mark.parametrize(
        "make_token",
        [
            lambda uid: forge_token(secret=ACCESS_SECRET, sub=uid),
            lambda uid: forge_token(secret=REFRESH_SECRET, sub=uid, lifetime=timedelta(seconds=-5)),
            lambda uid: forge_token(secret=REFRESH_SECRET, sub="deleted-user"),
            lambda uid: forge_token(secret=REFRESH_SECRET, sub=uid),  # no session record
        ],
        ids=["wrong-secret", "expired", "unknown-user", "no-session"],
    )
    def test_every_rejection_looks_identical(self, client, admin, make_token) -> None:
        resp = client.post(REFRESH_URL, headers=bearer(make_token(admin.id)))

        body = resp.get_json()
        assert resp.status_code == 403
        assert body["detail"] == "Invalid refresh token"
        assert body["code"] == "forbidden"
        assert "reason" not in body

    def test_missing_token_is_forbidden(self, client, admin) -> None:
        resp = client.post(REFRESH_URL, json={})

        assert resp.status_code == 403

    def test_refresh_token_is_refused_on_protected_routes(self, client, admin) -> None:
        data = _login(client).get_json()["data"]

        resp = client.get(PROFILE_URL, headers=bearer(data["refresh_token"]))

        assert resp.status_code == 401


class TestLogout:
    def test_logout_revokes_all_sessions(self, client, admin, session) -> None:
        tokens = [_login(client).get_json()["data"] for _ in range(2)]

        resp = client.post(LOGOUT_URL, headers=bearer(tokens[0]["access_token"]))

        assert resp.status_code == 200
        assert resp.get_json()["data"]["deleted_count"] == 2
        assert _session_count(session) == 0
        again = client.post(LOGOUT_URL, headers=bearer(tokens[0]["access_token"]))
        assert again.status_code == 200
        assert again.get_json()["data"]["deleted_count"] == 0

    def test_refresh_after_logout_is_forbidden(self, client, admin) -> None:
        data = _login(client).get_json()["data"]
        client.post(LOGOUT_URL, headers=bearer(data["access_token"]))

        resp = client.post(REFRESH_URL, headers=bearer(data["refresh_token"]))

        assert resp.status_code == 403

    def test_logout_requires_access_token(self, client, admin) -> None:
        assert client.post(LOGOUT_URL).status_code == 401


class TestCrossCutting:
    def test_request_id_is_echoed(self, client, admin) -> None:
        resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})

        assert resp.status_code == 200
        assert resp.headers["X-Request-ID"] == "req-123"
        assert resp.get_json()["db"] == "ok"

    def test_problem_bodies_carry_request_id(self, client, admin) -> None:
        resp = client.get(PROFILE_URL, headers={"X-Request-ID": "req-456"})

        assert resp.get_json()["request_id"] == "req-456"

    def test_unknown_route_is_problem_json(self, client) -> None:
        resp = client.get("/api/v1/nope")

        assert resp.status_code == 404
        assert resp.mimetype == "application/problem+json"
