from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.cookenu.auth import current_auth, require_auth
from app.cookenu.db import commit, db_session
from app.cookenu.errors import NotFoundError
from app.cookenu.ids import generate_id
from app.cookenu.modules.recipes.service import create_recipe, get_recipe_by_id, validate_recipe_payload
from app.cookenu.utils import json_body

bp = Blueprint("recipes", __name__)


@bp.post("/recipe")
@require_auth
def recipe_create():
    fields = validate_recipe_payload(json_body())
    auth = current_auth()

    s = db_session()
    recipe = create_recipe(
        s,
        recipe_id=generate_id(),
        title=fields["title"],
        description=fields["description"],
        user_id=auth.id,
    )
    commit(s, "create_recipe")
    current_app.logger.info("Recipe created (id=%s user_id=%s)", recipe.id, auth.id)
    return jsonify({"message": "Recipe created successfully", "id": recipe.id})


@bp.get("/recipe/<recipe_id>")
@require_auth
def recipe_detail(recipe_id: str):
    recipe = get_recipe_by_id(db_session(), recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe", recipe_id)
    return jsonify(recipe.to_dict())
