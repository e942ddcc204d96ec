"""
End-to-end tests of the HTTP surface (in-memory credential store).
"""

from unittest.mock import AsyncMock


def _register(client, username="alice", email="a@x.com", password="secret1"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


class TestRegisterEndpoint:
    def test_created(self, client):
        resp = _register(client)
        assert resp.status_code == 201
        body = resp.json()
        assert set(body) == {"accountId", "token"}

    def test_accepts_domain_field_names(self, client):
        resp = client.post(
            "/api/auth/register",
            json={"handle": "bob", "address": "b@x.com", "plaintext": "pw"},
        )
        assert resp.status_code == 201

    def test_duplicate(self, client, store):
        assert _register(client).status_code == 201
        resp = _register(client, username="alice2")
        assert resp.status_code == 400
        assert resp.json() == {"message": "account already exists"}
        assert len(store.accounts) == 1

    def test_store_failure_is_generic(self, client, store):
        store.add = AsyncMock(side_effect=RuntimeError("connection reset"))
        resp = _register(client)
        assert resp.status_code == 500
        assert resp.json() == {"message": "server error"}


class TestLoginEndpoint:
    def test_ok(self, client):
        registered = _register(client).json()
        resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["accountId"] == registered["accountId"]
        assert body["token"] != registered["token"]

    def test_invalid_responses_are_identical(self, client):
        _register(client)
        wrong_pw = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
        unknown = client.post("/api/auth/login", json={"email": "z@x.com", "password": "secret1"})
        assert wrong_pw.status_code == unknown.status_code == 400
        assert wrong_pw.json() == unknown.json() == {"message": "invalid credentials"}

    def test_store_failure_is_generic(self, client, store):
        store.find_by_address = AsyncMock(side_effect=RuntimeError("db down"))
        resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
        assert resp.status_code == 500
        assert resp.json() == {"message": "server error"}


class TestProtectedEndpoints:
    def test_full_scenario(self, client):
        reg = _register(client)
        assert reg.status_code == 201

        login = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
        assert login.status_code == 200
        account_id = login.json()["accountId"]
        token = login.json()["token"]

        ok = client.get("/api/events/protected", headers={"Authorization": f"Bearer {token}"})
        assert ok.status_code == 200
        assert ok.json()["accountId"] == account_id

        missing = client.get("/api/events/protected")
        assert missing.status_code == 401
        assert missing.json() == {"message": "no token, authorization denied"}

        tampered = client.get(
            "/api/events/protected", headers={"Authorization": f"Bearer {token}tampered"}
        )
        assert tampered.status_code == 401
        assert tampered.json() == {"message": "token is not valid"}

    def test_rejection_short_circuits_handler(self, client, store):
        store.find_by_id = AsyncMock()
        resp = client.get("/api/users/me", headers={"Authorization": "Bearer junk"})
        assert resp.status_code == 401
        store.find_by_id.assert_not_awaited()

    def test_me(self, client):
        token = _register(client).json()["token"]
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["username"] == "alice"
        assert body["email"] == "a@x.com"
        assert "password_hash" not in body

    def test_me_for_vanished_account(self, client, store):
        token = _register(client).json()["token"]
        store.accounts.clear()
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "account not found"}

    def test_process_time_header(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert "X-Process-Time" in resp.headers


class TestRequestValidation:
    def test_short_username_gets_message_shape(self, client, store):
        resp = _register(client, username="a")
        assert resp.status_code == 400
        assert resp.json() == {"message": "invalid request"}
        assert store.accounts == {}

    def test_missing_field_does_not_echo_input(self, client):
        resp = client.post("/api/auth/login", json={"email": "a@x.com"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "invalid request"}
        assert "a@x.com" not in resp.text
