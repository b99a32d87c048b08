import logging
import sys
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def setup_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    JSON lines unless DEBUG is on, in which case the console renderer is used.
    Anything bound with ``structlog.contextvars`` (the request id, for one)
    is merged into every event, including records from stdlib loggers.
    """
    if json_logs is None:
        json_logs = not settings.DEBUG

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log plus a per-request id.

    The id comes from the incoming ``X-Request-ID`` header or is generated,
    is bound to the structlog context for the lifetime of the request and is
    echoed back on the response. Health checks are not access-logged.
    """

    def __init__(self, app: ASGIApp, exclude_paths: tuple[str, ...] = ("/health",)) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger = structlog.get_logger("http")
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            await logger.aerror(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                exc_info=exc,
            )
            structlog.contextvars.clear_contextvars()
            raise

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in self.exclude_paths:
            await logger.ainfo(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                client=request.client.host if request.client else "unknown",
            )

        structlog.contextvars.clear_contextvars()
        return response
