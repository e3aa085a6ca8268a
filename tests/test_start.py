"""Tests for the gunicorn command line built by scripts/start.py."""
import pytest

from app.cookenu.config import load_settings
from scripts.start import gunicorn_argv


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for k in ("PORT", "WEB_CONCURRENCY", "WEB_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)


def _opt(argv, flag):
    return argv[argv.index(flag) + 1]


def test_defaults():
    argv = gunicorn_argv(load_settings())
    assert argv[:2] == ["gunicorn", "app.wsgi:app"]
    assert _opt(argv, "--bind") == "0.0.0.0:3003"
    assert _opt(argv, "--workers") == "2"
    assert _opt(argv, "--timeout") == "60"
    assert _opt(argv, "--log-level") == "info"
    assert "--preload" in argv


def test_settings_drive_bind_and_workers(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("WEB_CONCURRENCY", "4")
    monkeypatch.setenv("WEB_TIMEOUT", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    argv = gunicorn_argv(load_settings())
    assert _opt(argv, "--bind") == "0.0.0.0:8080"
    assert _opt(argv, "--workers") == "4"
    assert _opt(argv, "--timeout") == "30"
    assert _opt(argv, "--log-level") == "debug"


def test_invalid_port_exits_before_release(monkeypatch):
    import scripts.release
    import scripts.start

    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setattr(scripts.release, "run_release", lambda: pytest.fail("release must not run"))
    monkeypatch.setattr(scripts.start.os, "execvp", lambda *a: pytest.fail("gunicorn must not start"))

    with pytest.raises(SystemExit) as exc:
        scripts.start.main()
    assert exc.value.code == 1
