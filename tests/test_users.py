"""Tests for profile lookups and token enforcement."""
import pytest

from app.cookenu import create_app
from app.cookenu.models import Base
from app.cookenu.tokens import issue_token, verify_token


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)
    return app.test_client()


def _signup(client, email, name, role="NORMAL"):
    r = client.post("/signup", json={"email": email, "name": name, "password": "secret123", "role": role})
    assert r.status_code == 200
    return r.json["token"]


def test_profile_returns_own_user(client):
    token = _signup(client, "ana@example.com", "Ana")
    r = client.get("/user/profile", headers={"Authorization": token})
    assert r.status_code == 200
    assert r.json["name"] == "Ana"
    assert r.json["email"] == "ana@example.com"
    assert r.json["role"] == "NORMAL"
    assert r.json["id"] == verify_token(token, secret="test-secret").id
    assert "password_hash" not in r.json


def test_profile_accepts_bearer_header(client):
    token = _signup(client, "ana@example.com", "Ana")
    r = client.get("/user/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200


def test_profile_requires_token(client):
    r = client.get("/user/profile")
    assert r.status_code == 401
    assert r.json["message"] == "Missing token"


def test_profile_rejects_forged_token(client):
    _signup(client, "ana@example.com", "Ana")
    forged = issue_token({"id": "whoever", "role": "ADMIN"}, secret="not-the-server-secret")
    r = client.get("/user/profile", headers={"Authorization": forged})
    assert r.status_code == 401
    assert r.json["message"] == "Invalid token"


def test_profile_for_deleted_user_is_404(client):
    ghost = issue_token({"id": "no-such-user", "role": "NORMAL"}, secret="test-secret")
    r = client.get("/user/profile", headers={"Authorization": ghost})
    assert r.status_code == 404
    assert r.json["message"] == "User not found"


def test_get_other_user_by_id(client):
    token = _signup(client, "ana@example.com", "Ana")
    bob_token = _signup(client, "bob@example.com", "Bob", role="ADMIN")
    bob_id = verify_token(bob_token, secret="test-secret").id

    r = client.get(f"/user/{bob_id}", headers={"Authorization": token})
    assert r.status_code == 200
    assert r.json == {"id": bob_id, "name": "Bob", "email": "bob@example.com", "role": "ADMIN"}


def test_get_user_unknown_id(client):
    token = _signup(client, "ana@example.com", "Ana")
    r = client.get("/user/does-not-exist", headers={"Authorization": token})
    assert r.status_code == 404


def test_get_user_requires_token(client):
    r = client.get("/user/anything")
    assert r.status_code == 401
