# tests/test_logging.py
import io
import logging
import re

from fastapi.testclient import TestClient
from rich.console import Console

from app.config import Settings, get_settings
from app.database import ProductStore
from app.main import create_app
from app.logging_config import get_logger, setup_logging

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] (\w+) (\S+)$")


def _request_lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "api_store.http" and LINE.match(r.getMessage())]


def test_every_request_is_logged(client, auth_headers, caplog):
    caplog.set_level(logging.INFO, logger="api_store")

    client.get("/")
    client.get("/api/products?page=2", headers=auth_headers)
    client.delete("/api/products/missing")  # rejected by the gate, still logged

    lines = _request_lines(caplog)
    assert [LINE.match(line).groups() for line in lines] == [
        ("GET", "/"),
        ("GET", "/api/products?page=2"),
        ("DELETE", "/api/products/missing"),
    ]


def test_unhandled_error_is_logged_with_traceback(auth_headers, caplog):

    class BrokenStore(ProductStore):
        async def list(self, *args, **kwargs):
            raise RuntimeError("boom")

    caplog.set_level(logging.INFO, logger="api_store")
    TestClient(create_app(BrokenStore())).get("/api/products", headers=auth_headers)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].exc_info is not None
    assert "GET /api/products" in errors[0].getMessage()


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG")
    logger = setup_logging("INFO")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert get_logger("http").name == "api_store.http"


def test_console_shows_only_the_request_stamp():
    logger = setup_logging("INFO")
    handler = logger.handlers[0]
    handler.console = Console(file=io.StringIO(), width=200, color_system=None)

    get_logger("http").info("[%s] %s %s", "2026-10-19T12:31:45.934Z", "POST", "/api/products")

    out = handler.console.file.getvalue()
    assert out.lstrip().startswith("INFO")
    assert "[2026-10-19T12:31:45.934Z] POST /api/products" in out
    # no second, locale-formatted time column from the handler
    assert re.search(r"\d{2}/\d{2}/\d{2}", out) is None
    assert re.search(r"\d{2}:\d{2}:\d{2}", out.replace("12:31:45.934Z", "")) is None


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("API_STORE_API_KEY", "s3cret")
    monkeypatch.setenv("API_STORE_PORT", "8080")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.api_key == "s3cret"
        assert settings.port == 8080
    finally:
        get_settings.cache_clear()


def test_default_settings():
    settings = Settings()
    assert (settings.api_key, settings.port, settings.default_page, settings.default_limit) == ("12345", 3000, 1, 5)
