"""structlog setup and the request-scoped fields every log line carries.

Inside a request, lines carry ``request_id``, ``method`` and ``path``, plus
``user_id`` once the bearer token resolves. Production output is one JSON
object per line; ``DEBUG=true`` switches to the colored console renderer.
"""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from src.taskboard.core.config import get_settings

# uvicorn.access is replaced by the request-logging middleware
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "uvicorn.access")


def setup_logging(debug: bool = False) -> None:
    """Route structlog through stdlib logging with the taskboard processor chain."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation id; requests without one are left unbound."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(user_id: UUID, email: str | None = None) -> None:
    """Attach the authenticated user. The email is added only when LOG_USER_EMAILS is on."""
    bind_contextvars(user_id=str(user_id))
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
