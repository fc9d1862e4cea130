"""
Auth routes: register, login, logout, current user, rename.

    pytest tests/test_api_auth.py -v
"""

from conftest import TEST_PASSWORD
from core.store import SqlAlchemyEntityStore


class TestRegisterAndLogin:
    def test_register_returns_user_and_token(self, client):
        r = client.post("/api/auth/register", json={"username": "alice", "password": TEST_PASSWORD})
        assert r.status_code == 201
        body = r.json()
        assert body["username"] == "alice"
        assert body["access_token"]
        assert "password_hash" not in body

    def test_duplicate_username_rejected(self, client, register):
        register("alice")
        r = client.post("/api/auth/register", json={"username": "alice", "password": TEST_PASSWORD})
        assert r.status_code == 400

    def test_lost_registration_race_is_400(self, client, register, monkeypatch):
        register("alice")
        lookup = SqlAlchemyEntityStore.get_user_by_username
        calls = []

        def _stale_first_lookup(self, username):
            # the first check runs before the competing insert commits
            calls.append(username)
            return None if len(calls) == 1 else lookup(self, username)

        monkeypatch.setattr(SqlAlchemyEntityStore, "get_user_by_username", _stale_first_lookup)
        r = client.post("/api/auth/register", json={"username": "alice", "password": TEST_PASSWORD})
        assert r.status_code == 400
        assert r.json()["detail"] == "Username already exists"

    def test_usernames_are_case_sensitive(self, client, register):
        register("alice")
        r = client.post("/api/auth/register", json={"username": "Alice", "password": TEST_PASSWORD})
        assert r.status_code == 201

    def test_short_password_rejected(self, client):
        r = client.post("/api/auth/register", json={"username": "alice", "password": "short"})
        assert r.status_code == 400

    def test_login_with_form_credentials(self, client, register):
        register("alice")
        r = client.post("/api/auth/login", data={"username": "alice", "password": TEST_PASSWORD})
        assert r.status_code == 200
        assert r.json()["token_type"] == "bearer"
        assert "session" in r.cookies

    def test_login_wrong_password(self, client, register):
        register("alice")
        r = client.post("/api/auth/login", data={"username": "alice", "password": "WrongPass99"})
        assert r.status_code == 401


class TestSession:
    def test_cookie_session_authenticates(self, client, register):
        register("alice")
        client.post("/api/auth/login", data={"username": "alice", "password": TEST_PASSWORD})
        r = client.get("/api/auth/me")
        assert r.status_code == 200
        assert r.json()["username"] == "alice"

    def test_logout_clears_cookie(self, client, register):
        register("alice")
        client.post("/api/auth/login", data={"username": "alice", "password": TEST_PASSWORD})
        client.post("/api/auth/logout")
        assert client.get("/api/auth/me").status_code == 401

    def test_anonymous_is_rejected_everywhere(self, client):
        for method, path in [
            ("GET", "/api/devices"),
            ("POST", "/api/devices"),
            ("GET", "/api/tasks"),
            ("POST", "/api/tasks/1/complete"),
            ("DELETE", "/api/consumables/1"),
            ("GET", "/api/v1/tasks/summary"),
        ]:
            r = client.request(method, path)
            assert r.status_code == 401, f"{method} {path} -> {r.status_code}"

    def test_garbage_token_is_anonymous(self, client):
        r = client.get("/api/devices", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401


class TestRename:
    def test_rename(self, client, register):
        headers = register("alice")
        r = client.patch("/api/auth/me", json={"username": "alice2"}, headers=headers)
        assert r.status_code == 200
        assert client.get("/api/auth/me", headers=headers).json()["username"] == "alice2"

    def test_rename_to_taken_name(self, client, register):
        headers = register("alice")
        register("bob")
        r = client.patch("/api/auth/me", json={"username": "bob"}, headers=headers)
        assert r.status_code == 400


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["database"] == "connected"
