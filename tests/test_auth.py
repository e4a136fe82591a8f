import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from fastapi.testclient import TestClient

from flashfit.main import app
from flashfit.models import User
from flashfit.routers import auth
from flashfit.routers.auth import create_access_token


def test_register_returns_token_and_public_fields(client):
    r = client.post("/api/auth/register", json={
        "name": "Alice", "email": "alice@example.com", "password": "secret123", "phone": "555-0101",
    })
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"] == {"id": body["user"]["id"], "name": "Alice", "email": "alice@example.com", "phone": "555-0101"}
    assert "password" not in r.text
    assert "hashed_password" not in r.text


def test_register_stores_hash_not_password(client, db_session):
    client.post("/api/auth/register", json={"name": "Alice", "email": "alice@example.com", "password": "secret123"})
    user = db_session.query(User).filter(User.email == "alice@example.com").one()
    assert user.hashed_password != "secret123"
    assert user.hashed_password.startswith("$2")


def test_duplicate_email_is_conflict_and_keeps_first_user(client, db_session):
    first = client.post("/api/auth/register", json={"name": "Alice", "email": "alice@example.com", "password": "secret123"})
    assert first.status_code == 201

    second = client.post("/api/auth/register", json={"name": "Mallory", "email": "Alice@Example.com", "password": "other-pass"})
    assert second.status_code == 400
    assert second.json() == {"success": False, "message": "User with this email already exists"}

    users = db_session.query(User).filter(User.email == "alice@example.com").all()
    assert len(users) == 1
    assert users[0].name == "Alice"
    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert login.status_code == 200


def test_register_validation_errors(client):
    r = client.post("/api/auth/register", json={"name": "  ", "email": "not-an-email", "password": "123"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert {"name", "email", "password"} <= fields


def test_login_success(client, register):
    register(email="bob@example.com", password="hunter22")
    r = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "hunter22"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "bob@example.com"


def test_login_failures_are_indistinguishable(client, register):
    register(email="bob@example.com", password="hunter22")
    wrong_password = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "hunter22"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"success": False, "message": "Invalid email or password"}


def test_profile_requires_token(client):
    r = client.get("/api/auth/profile")
    assert r.status_code == 401
    assert r.json()["message"] == "Access denied. No token provided."


def test_profile_rejects_malformed_and_expired_tokens(client, register):
    _, user = register()
    r = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token."

    expired = create_access_token(user["email"], user["id"], "member", timedelta(minutes=-5))
    r = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401


def test_get_profile(client, register):
    headers, user = register(name="Carol", phone="555")
    r = client.get("/api/auth/profile", headers=headers)
    assert r.status_code == 200
    profile = r.json()["user"]
    assert profile["id"] == user["id"]
    assert profile["name"] == "Carol"
    assert profile["role"] == "member"
    assert "created_at" in profile and "updated_at" in profile


def test_update_profile_is_partial(client, register):
    headers, _ = register(name="Carol", phone="555")
    before = client.get("/api/auth/profile", headers=headers).json()["user"]

    r = client.put("/api/auth/profile", headers=headers, json={"phone": "777"})
    assert r.status_code == 200
    after = r.json()["user"]
    assert after["name"] == "Carol"
    assert after["phone"] == "777"
    assert after["updated_at"] >= before["updated_at"]

    r = client.put("/api/auth/profile", headers=headers, json={"name": "Caroline"})
    assert r.json()["user"] == {**after, "name": "Caroline", "updated_at": r.json()["user"]["updated_at"]}


def test_update_profile_rejects_empty_name(client, auth_headers):
    r = client.put("/api/auth/profile", headers=auth_headers, json={"name": ""})
    assert r.status_code == 400


def test_admin_email_gets_admin_role(client, register):
    headers, _ = register(email="admin@example.com")
    assert client.get("/api/auth/profile", headers=headers).json()["user"]["role"] == "admin"


class SlowHasher:
    """Wraps the real context and stalls each hash, like a costly bcrypt round count."""

    def __init__(self, context, delay):
        self.context = context
        self.delay = delay

    def hash(self, secret):
        time.sleep(self.delay)
        return self.context.hash(secret)

    def verify(self, secret, hashed):
        return self.context.verify(secret, hashed)


def test_password_hashing_does_not_stall_other_requests(client, monkeypatch):
    monkeypatch.setattr(auth, "bcryptcontext", SlowHasher(auth.bcryptcontext, delay=1.5))

    # One shared event loop for both requests, so a blocking handler would delay the health check.
    with TestClient(app) as shared:
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(shared.post, "/api/auth/register", json={
                "name": "Slow", "email": "slow@example.com", "password": "secret123",
            })
            time.sleep(0.3)
            started = time.monotonic()
            health = shared.get("/api/health")
            latency = time.monotonic() - started
            registered = pending.result()

    assert health.status_code == 200
    assert registered.status_code == 201
    assert latency < 0.8
