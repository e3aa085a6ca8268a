#!/usr/bin/env python3
"""
Container entrypoint: migrate, then hand the process over to gunicorn.

Bind address, worker count and timeout come from app.cookenu.config
(PORT, WEB_CONCURRENCY, WEB_TIMEOUT), so the server and the app agree
on one validated view of the environment.

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.cookenu.config import Settings, load_settings  # noqa: E402

WSGI_TARGET = "app.wsgi:app"


def gunicorn_argv(settings: Settings) -> list[str]:
    # --preload builds the app once in the master; db.py disposes inherited pool connections in each worker.
    return [
        "gunicorn",
        WSGI_TARGET,
        "--bind", f"0.0.0.0:{settings.port}",
        "--workers", str(settings.web_concurrency),
        "--timeout", str(settings.web_timeout),
        "--preload",
        "--log-level", settings.log_level.lower(),
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    try:
        settings = load_settings()
    except RuntimeError as e:
        print(f"ERROR: {e}", flush=True)
        sys.exit(1)

    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    argv = gunicorn_argv(settings)
    print(f"=== Starting gunicorn on :{settings.port} ({settings.web_concurrency} workers) ===", flush=True)
    os.execvp(argv[0], argv)


if __name__ == "__main__":
    main()
