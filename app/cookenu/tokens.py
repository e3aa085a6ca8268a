from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from app.cookenu.errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
_BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class AuthClaims:
    """Decoded token payload; lives on `g.auth` for one request."""

    id: str
    role: str


def issue_token(claims: dict[str, Any], *, secret: str, ttl_seconds: int = 0) -> str:
    """
    Sign a token carrying the user's id and role.
    With ttl_seconds <= 0 no `exp` claim is written and the token never expires.
    """
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "id": claims["id"],
        "role": claims["role"],
        "iat": now,
    }
    if ttl_seconds > 0:
        payload["exp"] = now + timedelta(seconds=ttl_seconds)
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def strip_bearer(header_value: str | None) -> str:
    token = (header_value or "").strip()
    if token.lower().startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):].strip()
    return token


def verify_token(token: str | None, *, secret: str) -> AuthClaims:
    token = strip_bearer(token)
    if not token:
        raise AuthenticationError("Missing token")
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected token: %s", e)
        raise AuthenticationError("Invalid token")

    user_id = payload.get("id")
    role = payload.get("role")
    if not isinstance(user_id, str) or not isinstance(role, str):
        raise AuthenticationError("Invalid token")
    return AuthClaims(id=user_id, role=role)
