"""Tests for engine setup, fork handling and commit error mapping."""
import pytest

from app.cookenu import create_app, db
from app.cookenu.errors import StorageError
from app.cookenu.models import Base, User


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])
    return app


def test_every_app_engine_is_tracked_for_fork_reset(app):
    other = create_app()
    assert app.extensions["sqlalchemy_engine"] in db._engines
    assert other.extensions["sqlalchemy_engine"] in db._engines


def test_engines_usable_after_fork_reset(app):
    client = app.test_client()
    assert client.get("/health").status_code == 200

    db._dispose_engines_after_fork()

    r = client.get("/health")
    assert r.status_code == 200
    assert r.json == {"ok": True}


def test_fork_hook_registered_once_per_process(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(db.os, "register_at_fork", lambda **kw: calls.append(kw), raising=False)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'again.db'}")
    monkeypatch.setenv("ENV", "test")

    create_app()
    create_app()
    assert calls == []


@pytest.mark.parametrize(
    "url,present,absent",
    [
        ("postgresql+psycopg://cook:pw@db/cookenu", "pool_size", "connect_args"),
        ("sqlite:///cookenu.db", "connect_args", "pool_size"),
    ],
)
def test_engine_options_per_backend(url, present, absent):
    options = db.engine_options(url)
    assert options["pool_pre_ping"] is True
    assert present in options
    assert absent not in options


def test_failed_commit_is_storage_error(app):
    s = app.extensions["sqlalchemy_sessionmaker"]()
    try:
        for user_id in ("u1", "u2"):
            s.add(User(id=user_id, email="same@example.com", name="Same", password_hash="x", role="NORMAL"))
        with pytest.raises(StorageError) as exc:
            db.commit(s, "seed_users")
        assert exc.value.message == "Storage failure during seed_users"
        assert s.query(User).count() == 0
    finally:
        s.close()
