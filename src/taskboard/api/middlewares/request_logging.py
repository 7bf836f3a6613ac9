"""Per-request log context and access logging."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint
from structlog.contextvars import bind_contextvars

from src.taskboard.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger("taskboard.access")

# Polled by health checks and scrapers; logging them drowns out real traffic
_QUIET_PATHS = frozenset({"/health", "/metrics"})


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id, method and path for the request, then log its outcome."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    bind_contextvars(method=request.method, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in _QUIET_PATHS:
            logger.info(
                "Request handled",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        return response
    finally:
        clear_request_context()
