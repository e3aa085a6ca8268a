from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from app.cookenu.errors import StorageError, ValidationError
from app.cookenu.models import ID_MAX_LENGTH, User
from app.cookenu.modules.followers.models import Follower
from app.cookenu.modules.recipes.models import Recipe
from app.cookenu.utils import string_field

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def validate_follow_payload(payload: dict) -> str:
    target_id = string_field(payload, "userToFollowId", label="userToFollowId", max_length=ID_MAX_LENGTH)
    if not target_id:
        raise ValidationError("userToFollowId is required")
    return target_id


def create_follower(s: "Session", user_id: str, user_to_follow_id: str) -> Follower:
    edge = Follower(user_id=user_id, followed_user_id=user_to_follow_id)
    try:
        s.add(edge)
        s.flush()
    except SQLAlchemyError as e:
        logger.error("create_follower failed (user_id=%s followed=%s): %s", user_id, user_to_follow_id, e)
        raise StorageError("create_follower") from e
    return edge


def unfollow(s: "Session", user_id: str, user_to_unfollow_id: str) -> int:
    """Delete every edge matching (follower, followed). Returns the number of rows removed."""
    stmt = (
        delete(Follower)
        .where(Follower.user_id == user_id)
        .where(Follower.followed_user_id == user_to_unfollow_id)
    )
    try:
        result = s.execute(stmt)
    except SQLAlchemyError as e:
        logger.error("unfollow failed (user_id=%s followed=%s): %s", user_id, user_to_unfollow_id, e)
        raise StorageError("unfollow") from e
    return result.rowcount or 0


def get_followers(s: "Session", user_id: str) -> list[str]:
    """Ids of the users that `user_id` follows, in follow order."""
    stmt = select(Follower.followed_user_id).where(Follower.user_id == user_id).order_by(Follower.id.asc())
    try:
        return list(s.scalars(stmt).all())
    except SQLAlchemyError as e:
        logger.error("get_followers failed (user_id=%s): %s", user_id, e)
        raise StorageError("get_followers") from e


def get_feed(s: "Session", user_id: str) -> list[dict]:
    """
    Recipes authored by users that `user_id` follows, newest first.
    A duplicated follow edge does not duplicate feed entries.
    """
    followed = select(Follower.followed_user_id).where(Follower.user_id == user_id)
    stmt = (
        select(Recipe, User.name)
        .join(User, User.id == Recipe.user_id)
        .where(Recipe.user_id.in_(followed))
        .order_by(Recipe.created_at.desc(), Recipe.id.asc())
    )
    try:
        rows = s.execute(stmt).all()
    except SQLAlchemyError as e:
        logger.error("get_feed failed (user_id=%s): %s", user_id, e)
        raise StorageError("get_feed") from e

    feed = []
    for recipe, author_name in rows:
        item = recipe.to_dict()
        item["userName"] = author_name
        feed.append(item)
    return feed
