"""
Development helper: create tables directly from the models (no Alembic)
and optionally seed a demo user.

Usage:
  python scripts/init_db.py
  SEED_DEMO_USER=1 DEMO_EMAIL=cook@example.com DEMO_PASSWORD=secret123 python scripts/init_db.py
"""
import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.cookenu.ids import generate_id  # noqa: E402
from app.cookenu.models import Base, User, UserRole  # noqa: E402
from app.cookenu.security import hash_password  # noqa: E402
from scripts._db_utils import create_script_engine, env_flag, resolve_database_url, script_session  # noqa: E402


def create_tables(*, database_url: str | None = None) -> None:
    db_url = resolve_database_url(database_url)
    engine = create_script_engine(db_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    print("Tables created.")


def seed_demo_user(*, database_url: str | None = None) -> None:
    """
    Idempotent: does NOT overwrite an existing user's password.
    """
    email = (os.environ.get("DEMO_EMAIL") or "cook@example.com").strip().lower()
    password = os.environ.get("DEMO_PASSWORD") or "change-me"
    db_url = resolve_database_url(database_url)

    with script_session(db_url) as s:
        user = s.query(User).filter(User.email == email).one_or_none()
        if not user:
            s.add(
                User(
                    id=generate_id(),
                    email=email,
                    name="Demo Cook",
                    password_hash=hash_password(password),
                    role=UserRole.NORMAL,
                )
            )

    print(f"Demo user email: {email}")
    print("Demo user password: (from DEMO_PASSWORD)")


def main() -> None:
    create_tables()
    if env_flag("SEED_DEMO_USER"):
        seed_demo_user()


if __name__ == "__main__":
    main()
