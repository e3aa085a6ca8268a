"""Tests for id generation, password hashing and tokens."""
import time
import uuid

import jwt
import pytest

from app.cookenu.errors import AuthenticationError
from app.cookenu.ids import generate_id
from app.cookenu.security import compare_password, hash_password
from app.cookenu.tokens import issue_token, verify_token

SECRET = "unit-secret"


def test_generate_id_is_unique_uuid():
    ids = {generate_id() for _ in range(500)}
    assert len(ids) == 500
    for value in list(ids)[:5]:
        assert str(uuid.UUID(value)) == value


def test_hash_and_compare():
    hashed = hash_password("abc123")
    assert hashed != "abc123"
    assert compare_password("abc123", hashed) is True
    assert compare_password("abc124", hashed) is False


def test_hash_is_salted():
    assert hash_password("same-password") != hash_password("same-password")


@pytest.mark.parametrize("bad", ["", None, 123])
def test_hash_rejects_empty_or_non_string(bad):
    with pytest.raises(ValueError):
        hash_password(bad)


def test_compare_with_malformed_hash_is_false():
    assert compare_password("abc123", "not-a-hash") is False
    assert compare_password("abc123", "") is False
    assert compare_password("", hash_password("abc123")) is False


def test_token_round_trip():
    token = issue_token({"id": "user-1", "role": "ADMIN"}, secret=SECRET)
    claims = verify_token(token, secret=SECRET)
    assert claims.id == "user-1"
    assert claims.role == "ADMIN"


def test_token_without_ttl_has_no_exp():
    token = issue_token({"id": "user-1", "role": "NORMAL"}, secret=SECRET)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert "exp" not in payload


def test_token_accepts_bearer_prefix():
    token = issue_token({"id": "user-1", "role": "NORMAL"}, secret=SECRET)
    assert verify_token(f"Bearer {token}", secret=SECRET).id == "user-1"


def test_token_wrong_secret_rejected():
    token = issue_token({"id": "user-1", "role": "NORMAL"}, secret=SECRET)
    with pytest.raises(AuthenticationError):
        verify_token(token, secret="other-secret")


@pytest.mark.parametrize("bad", [None, "", "   ", "garbage", "a.b.c"])
def test_token_missing_or_malformed_rejected(bad):
    with pytest.raises(AuthenticationError):
        verify_token(bad, secret=SECRET)


def test_token_missing_claims_rejected():
    token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        verify_token(token, secret=SECRET)


def test_token_expiry_enforced_when_ttl_set():
    token = issue_token({"id": "user-1", "role": "NORMAL"}, secret=SECRET, ttl_seconds=1)
    assert verify_token(token, secret=SECRET).id == "user-1"
    time.sleep(2)
    with pytest.raises(AuthenticationError) as exc:
        verify_token(token, secret=SECRET)
    assert "expired" in exc.value.message
