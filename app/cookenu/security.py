from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(plaintext: str) -> str:
    """Salted slow hash of a plaintext password (werkzeug's default method)."""
    if not isinstance(plaintext, str) or not plaintext:
        raise ValueError("Password to hash must be a non-empty string.")
    return generate_password_hash(plaintext)


def compare_password(plaintext: str, hashed: str) -> bool:
    """Constant-time check of a plaintext password against a stored hash."""
    if not plaintext or not hashed:
        return False
    try:
        return check_password_hash(hashed, plaintext)
    except ValueError:
        # Unknown hash method in the stored value.
        return False
