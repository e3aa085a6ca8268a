from __future__ import annotations

from flask import Blueprint, jsonify

from app.cookenu.auth import current_auth, require_auth
from app.cookenu.db import db_session
from app.cookenu.errors import NotFoundError
from app.cookenu.modules.users.service import get_user_by_id, user_to_dict

bp = Blueprint("users", __name__)


@bp.get("/user/profile")
@require_auth
def profile():
    auth = current_auth()
    user = get_user_by_id(db_session(), auth.id)
    if user is None:
        raise NotFoundError("User", auth.id)
    return jsonify(user_to_dict(user))


@bp.get("/user/<user_id>")
@require_auth
def user_detail(user_id: str):
    user = get_user_by_id(db_session(), user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return jsonify(user_to_dict(user))
