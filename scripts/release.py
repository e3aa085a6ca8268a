"""
Release-phase helper.

Goal:
- Fail fast if no database is configured (avoid silently using SQLite in prod).
- Run alembic migrations.

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _require_database_url() -> str:
    if not (os.environ.get("DATABASE_URL") or os.environ.get("DB_HOST") or "").strip():
        raise RuntimeError("Missing database configuration. Set DATABASE_URL or DB_HOST/DB_PORT/DB_USER/DB_PASSWORD/DB_DATABASE.")
    from scripts._db_utils import resolve_database_url

    return resolve_database_url()


def run_release() -> None:
    db_url = _require_database_url()
    # Guardrail: prevent accidental prod deploys against SQLite.
    env = (os.environ.get("ENV") or "").strip().lower()
    if env in ("prod", "production") and db_url.startswith("sqlite"):
        raise RuntimeError("Refusing to run release on sqlite DATABASE_URL in production.")

    print("=== Cookenu release start ===", flush=True)
    print(f"ENV={env or '(unset)'}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)
    print("=== Cookenu release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
