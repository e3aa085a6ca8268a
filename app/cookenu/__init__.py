import logging

from flask import Flask, g
from dotenv import load_dotenv

from app.cookenu import models  # noqa: F401  (registers every table on Base.metadata)
from app.cookenu.config import load_config
from app.cookenu.db import init_db, teardown_db_session
from app.cookenu.errors import register_error_handlers
from app.cookenu.routes import bp as routes_bp
from app.cookenu.auth import assign_request_id, bp as auth_bp
from app.cookenu.modules.users.routes import bp as users_bp
from app.cookenu.modules.recipes.routes import bp as recipes_bp
from app.cookenu.modules.followers.routes import bp as followers_bp


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    app.json.sort_keys = False

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must point at a real database server in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(recipes_bp)
    app.register_blueprint(followers_bp)

    app.before_request(assign_request_id)
    app.teardown_appcontext(teardown_db_session)
    register_error_handlers(app)

    @app.after_request
    def _echo_request_id(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers["X-Request-ID"] = rid
        return response

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
