from flask import Blueprint
from sqlalchemy import text

from app.cookenu.db import db_session

bp = Blueprint("routes", __name__)


@bp.get("/health")
def health():
    """Health check endpoint. Round-trips the database; returns JSON."""
    db_session().execute(text("SELECT 1"))
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    """
    Fast liveness probe. No DB access, minimal overhead.
    """
    return "ok", 200
