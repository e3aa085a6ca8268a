from __future__ import annotations

import uuid
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Blueprint, current_app, g, jsonify, request

from app.cookenu.db import commit, db_session
from app.cookenu.errors import AuthenticationError, ValidationError
from app.cookenu.ids import generate_id
from app.cookenu.modules.users.service import (
    create_user,
    get_user_by_email,
    normalize_email,
    validate_email,
    validate_signup_payload,
)
from app.cookenu.security import compare_password, hash_password
from app.cookenu.tokens import AuthClaims, issue_token, verify_token
from app.cookenu.utils import json_body

bp = Blueprint("auth", __name__)


def assign_request_id() -> None:
    """Per-request id for log correlation, echoed back as X-Request-ID."""
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    g.auth = None


def _issue(user_id: str, role: str) -> str:
    return issue_token(
        {"id": user_id, "role": role},
        secret=current_app.config["SECRET_KEY"],
        ttl_seconds=current_app.config.get("TOKEN_TTL_SECONDS", 0),
    )


def current_auth() -> AuthClaims:
    claims: AuthClaims | None = getattr(g, "auth", None)
    if claims is None:
        raise AuthenticationError("Missing token")
    return claims


def require_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Verify the Authorization header and expose the decoded claims on g.auth."""

    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        try:
            g.auth = verify_token(request.headers.get("Authorization"), secret=current_app.config["SECRET_KEY"])
        except AuthenticationError as e:
            current_app.logger.info("Auth rejected: %s (path=%s request_id=%s)", e.message, request.path, getattr(g, "request_id", None))
            raise
        return fn(*args, **kwargs)

    return wrapped


@bp.post("/signup")
def signup():
    fields = validate_signup_payload(json_body())

    s = db_session()
    if get_user_by_email(s, fields["email"]) is not None:
        raise ValidationError("Email already registered")

    user = create_user(
        s,
        user_id=generate_id(),
        email=fields["email"],
        name=fields["name"],
        password_hash=hash_password(fields["password"]),
        role=fields["role"],
    )
    commit(s, "signup")
    current_app.logger.info("User signed up (id=%s role=%s)", user.id, user.role)
    return jsonify({"token": _issue(user.id, user.role)})


@bp.post("/login")
def login():
    payload = json_body()
    email = normalize_email(payload.get("email"))
    validate_email(email)
    password = payload.get("password")
    if not isinstance(password, str) or not password:
        raise ValidationError("Invalid password")

    s = db_session()
    user = get_user_by_email(s, email)
    if user is None or not compare_password(password, user.password_hash):
        current_app.logger.info("Login failed (request_id=%s)", getattr(g, "request_id", None))
        raise ValidationError("Invalid credentials")

    return jsonify({"token": _issue(user.id, user.role)})
