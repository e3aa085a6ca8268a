from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.cookenu.auth import current_auth, require_auth
from app.cookenu.db import commit, db_session
from app.cookenu.errors import NotFoundError
from app.cookenu.modules.followers.service import (
    create_follower,
    get_feed,
    get_followers,
    unfollow,
    validate_follow_payload,
)
from app.cookenu.modules.users.service import get_user_by_id
from app.cookenu.utils import json_body

bp = Blueprint("followers", __name__)


@bp.post("/user/follow")
@require_auth
def follow():
    target_id = validate_follow_payload(json_body())
    auth = current_auth()

    s = db_session()
    if get_user_by_id(s, target_id) is None:
        raise NotFoundError("User", target_id)
    create_follower(s, auth.id, target_id)
    commit(s, "follow")
    return jsonify({"message": "Followed successfully"})


@bp.post("/user/unfollow")
@require_auth
def unfollow_user():
    target_id = validate_follow_payload(json_body())
    auth = current_auth()

    s = db_session()
    removed = unfollow(s, auth.id, target_id)
    commit(s, "unfollow")
    current_app.logger.debug("Unfollow removed %s edge(s) (user_id=%s)", removed, auth.id)
    return jsonify({"message": "Unfollowed successfully"})


@bp.get("/user/following")
@require_auth
def following():
    return jsonify({"following": get_followers(db_session(), current_auth().id)})


@bp.get("/user/feed")
@require_auth
def feed():
    return jsonify({"feed": get_feed(db_session(), current_auth().id)})
