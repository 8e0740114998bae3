"""Tests for password hashing, session tokens and the /auth endpoints."""

from cryptography.fernet import Fernet

from enrollment.services.auth import (
    TokenService,
    authenticate,
    bootstrap_admin,
    hash_password,
    verify_password,
)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def test_hash_and_verify_password():
    stored = hash_password("s3nha")
    assert verify_password("s3nha", stored)
    assert not verify_password("wrong", stored)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_rejects_malformed_hash():
    assert not verify_password("x", "not-a-hash")


def test_token_round_trip(store):
    user = store.create_user("maria", hash_password("pw"))
    service = TokenService(key=Fernet.generate_key().decode())

    assert service.user_id_for(service.issue(user)) == user.id


def test_token_from_other_key_is_rejected(store):
    user = store.create_user("maria", hash_password("pw"))
    issued = TokenService(key=Fernet.generate_key().decode()).issue(user)

    other = TokenService(key=Fernet.generate_key().decode())
    assert other.user_id_for(issued) is None
    assert other.user_id_for("garbage") is None


def test_authenticate(store):
    store.create_user("maria", hash_password("pw"))

    assert authenticate(store, "maria", "pw").username == "maria"
    assert authenticate(store, "maria", "nope") is None
    assert authenticate(store, "joao", "pw") is None


def test_bootstrap_admin_runs_once(store, monkeypatch):
    from enrollment.services import auth

    monkeypatch.setattr(auth.settings, "admin_username", "root")
    monkeypatch.setattr(auth.settings, "admin_password", "toor")

    created = bootstrap_admin(store)
    assert created.is_admin
    assert authenticate(store, "root", "toor") is not None
    assert bootstrap_admin(store) is None
    assert len(store.users) == 1


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

def test_register_returns_token_and_user(client):
    response = client.post("/auth/register", json={"username": "maria", "password": "pw"})

    assert response.status_code == 201
    data = response.json()
    assert data["user"] == {"id": 1, "username": "maria", "is_admin": False}
    assert data["token"]


def test_register_duplicate_username(client):
    client.post("/auth/register", json={"username": "maria", "password": "pw"})
    response = client.post("/auth/register", json={"username": "maria", "password": "other"})
    assert response.status_code == 400


def test_login_and_current_user(client, store):
    store.create_user("maria", hash_password("pw"))

    response = client.post("/auth/login", json={"username": "maria", "password": "pw"})
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "maria"


def test_login_with_bad_credentials(client, store):
    store.create_user("maria", hash_password("pw"))
    response = client.post("/auth/login", json={"username": "maria", "password": "nope"})
    assert response.status_code == 401


def test_current_user_requires_token(client):
    assert client.get("/auth/user").status_code == 401
    assert client.get("/auth/user", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_logout_revokes_token(client, student_headers):
    assert client.get("/auth/user", headers=student_headers).status_code == 200

    response = client.post("/auth/logout", headers=student_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "logged_out"

    after = client.get("/auth/user", headers=student_headers)
    assert after.status_code == 401
    assert after.json()["detail"] == "Session has ended"


def test_revoke_token_drops_tokens_that_no_longer_decode(store):
    store.revoked_tokens.update({"expired", "live"})

    store.revoke_token("current", lambda t: t != "expired")

    assert store.revoked_tokens == {"live", "current"}


def test_logout_prunes_dead_revocations(client, store, tokens, student_headers):
    other = store.create_user("outro", hash_password("pw"))
    still_valid = tokens.issue(other)
    store.revoked_tokens.update({"garbage", still_valid})

    assert client.post("/auth/logout", headers=student_headers).status_code == 200

    current = student_headers["Authorization"].removeprefix("Bearer ")
    assert store.revoked_tokens == {still_valid, current}
