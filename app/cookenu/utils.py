from __future__ import annotations

from flask import request

from app.cookenu.errors import ValidationError


def json_body() -> dict:
    """Parse the request body as a JSON object; a missing body counts as empty."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def string_field(payload: dict, key: str, *, label: str, max_length: int | None = None) -> str:
    """
    Stripped string value of `payload[key]`, or "" when absent/null.

    Non-string values raise "Invalid <label>"; values longer than the backing
    column raise "<Label> must be at most N characters".
    """
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {label}")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label[:1].upper()}{label[1:]} must be at most {max_length} characters")
    return value
