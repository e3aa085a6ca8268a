from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.cookenu.errors import StorageError, ValidationError
from app.cookenu.models import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User, UserRole
from app.cookenu.utils import string_field

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(raw: object) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ValidationError("Invalid email")
    return raw.strip().lower()


def validate_email(email: str) -> None:
    if not email or "@" not in email:
        raise ValidationError("Invalid email")
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")


def validate_signup_payload(payload: dict) -> dict:
    """Validate a signup body. Returns the cleaned fields or raises ValidationError."""
    email = normalize_email(payload.get("email"))
    validate_email(email)

    password = payload.get("password")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Invalid password")

    name = string_field(payload, "name", label="name", max_length=NAME_MAX_LENGTH)
    if not name:
        raise ValidationError("Name is required")

    role = string_field(payload, "role", label="role").upper() or UserRole.NORMAL
    if role not in UserRole.ALL:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(UserRole.ALL)}")

    return {"email": email, "password": password, "name": name, "role": role}


def create_user(s: "Session", *, user_id: str, email: str, name: str, password_hash: str, role: str) -> User:
    user = User(id=user_id, email=email, name=name, password_hash=password_hash, role=role)
    try:
        s.add(user)
        s.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same email.
        s.rollback()
        logger.info("create_user rejected duplicate email (email=%s)", email)
        raise ValidationError("Email already registered") from e
    except SQLAlchemyError as e:
        logger.error("create_user failed (email=%s): %s", email, e)
        raise StorageError("create_user") from e
    return user


def get_user_by_email(s: "Session", email: str) -> User | None:
    try:
        return s.query(User).filter(User.email == normalize_email(email)).one_or_none()
    except SQLAlchemyError as e:
        logger.error("get_user_by_email failed: %s", e)
        raise StorageError("get_user_by_email") from e


def get_user_by_id(s: "Session", user_id: str) -> User | None:
    try:
        return s.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error("get_user_by_id failed (id=%s): %s", user_id, e)
        raise StorageError("get_user_by_id") from e


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }
