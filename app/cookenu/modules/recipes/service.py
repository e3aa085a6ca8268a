from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from app.cookenu.errors import StorageError, ValidationError
from app.cookenu.modules.recipes.models import TITLE_MAX_LENGTH, Recipe
from app.cookenu.utils import string_field

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def validate_recipe_payload(payload: dict) -> dict:
    title = string_field(payload, "title", label="title", max_length=TITLE_MAX_LENGTH)
    description = string_field(payload, "description", label="description")
    if not title:
        raise ValidationError("Title is required")
    if not description:
        raise ValidationError("Description is required")
    return {"title": title, "description": description}


def create_recipe(
    s: "Session",
    *,
    recipe_id: str,
    title: str,
    description: str,
    user_id: str,
    created_at: datetime | None = None,
) -> Recipe:
    recipe = Recipe(
        id=recipe_id,
        title=title,
        description=description,
        created_at=created_at or datetime.utcnow(),
        user_id=user_id,
    )
    try:
        s.add(recipe)
        s.flush()
    except SQLAlchemyError as e:
        logger.error("create_recipe failed (user_id=%s): %s", user_id, e)
        raise StorageError("create_recipe") from e
    return recipe


def get_recipe_by_id(s: "Session", recipe_id: str) -> Recipe | None:
    try:
        return s.get(Recipe, recipe_id)
    except SQLAlchemyError as e:
        logger.error("get_recipe_by_id failed (id=%s): %s", recipe_id, e)
        raise StorageError("get_recipe_by_id") from e
