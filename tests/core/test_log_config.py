"""Tests for logging setup and the request logging middleware."""

import logging

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.log_config import REQUEST_ID_HEADER, RequestLoggingMiddleware, setup_logging


def _logged_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"request_id": structlog.contextvars.get_contextvars().get("request_id", "")}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    return app


def _events(caplog) -> list[dict]:
    return [record.msg for record in caplog.records if isinstance(record.msg, dict)]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    setup_logging()


class TestSetupLogging:
    def test_explicit_level_wins(self, restore_root_logger):
        setup_logging(level="debug", json_logs=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_defaults_to_configured_level(self, restore_root_logger):
        setup_logging()

        # .env.test sets LOG_LEVEL=WARNING
        assert restore_root_logger.level == logging.WARNING


@pytest.mark.asyncio
async def test_request_id_generated_and_bound():
    async with AsyncClient(transport=ASGITransport(app=_logged_app()), base_url="http://test") as client:
        response = await client.get("/ping")

    request_id = response.headers[REQUEST_ID_HEADER]
    assert request_id
    assert response.json() == {"request_id": request_id}
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.asyncio
async def test_incoming_request_id_is_echoed():
    async with AsyncClient(transport=ASGITransport(app=_logged_app()), base_url="http://test") as client:
        response = await client.get("/ping", headers={REQUEST_ID_HEADER: "abc-123"})

    assert response.headers[REQUEST_ID_HEADER] == "abc-123"
    assert response.json() == {"request_id": "abc-123"}


@pytest.mark.asyncio
async def test_access_log_skips_health(caplog):
    caplog.set_level(logging.INFO, logger="http")

    async with AsyncClient(transport=ASGITransport(app=_logged_app()), base_url="http://test") as client:
        await client.get("/health")
        await client.get("/ping", headers={REQUEST_ID_HEADER: "req-1"})

    access = [event for event in _events(caplog) if event.get("event") == "request"]
    assert [event["path"] for event in access] == ["/ping"]
    assert access[0]["status"] == 200
    assert access[0]["request_id"] == "req-1"


@pytest.mark.asyncio
async def test_unhandled_error_logged_as_request_failed(caplog):
    caplog.set_level(logging.INFO, logger="http")

    async with AsyncClient(transport=ASGITransport(app=_logged_app()), base_url="http://test") as client:
        with pytest.raises(RuntimeError, match="kaboom"):
            await client.get("/boom")

    failed = [event for event in _events(caplog) if event.get("event") == "request_failed"]
    assert len(failed) == 1
    assert failed[0]["path"] == "/boom"
    assert structlog.contextvars.get_contextvars() == {}
