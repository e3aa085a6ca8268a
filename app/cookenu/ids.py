import uuid


def generate_id() -> str:
    """Random opaque identifier for new users and recipes."""
    return str(uuid.uuid4())
