"""Logging for the LogiRoute service.

Records flow through the standard library (stdout, ``logiroute.log`` and an
errors-only ``logiroute_error.log`` under ``LOG_DIR``) and are shaped by
structlog. The output format follows the deployment: JSON lines in production
and staging, a coloured Rich console elsewhere. ``LOG_FORMAT`` (``json`` or
``console``) and ``LOG_LEVEL`` override either choice.

Every event carries ``service="logiroute"`` plus whatever request context the
HTTP middleware bound with :func:`add_context`.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

SERVICE_NAME = "logiroute"

LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
JSON_ENVIRONMENTS = ("production", "staging")

# Framework loggers that only add noise at dispatch level
QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access", "sqlalchemy.engine")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def environment() -> str:
    """The deployment name, read from the first of ENV, ENVIRONMENT or PROTEAN_ENV."""
    for variable in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        if value := os.getenv(variable):
            return value.lower()
    return "development"


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", LEVEL_BY_ENVIRONMENT.get(environment(), "INFO")).upper()


def renders_json() -> bool:
    log_format = os.getenv("LOG_FORMAT", "").lower()
    if log_format in ("json", "console"):
        return log_format == "json"
    return environment() in JSON_ENVIRONMENTS


def _rotating_handler(path: Path, level: str | int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _stdlib_handlers(log_level: str) -> list[logging.Handler]:
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    return [
        console,
        _rotating_handler(log_dir / f"{SERVICE_NAME}.log", log_level),
        _rotating_handler(log_dir / f"{SERVICE_NAME}_error.log", logging.ERROR),
    ]


def _add_service(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderer(as_json: bool):
    if as_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def build_processors(as_json: bool) -> list:
    """The structlog chain, ending in the renderer for the chosen format."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_service,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        _renderer(as_json),
    ]


def configure_logging() -> None:
    """Install the handlers and the structlog chain. Safe to call more than once."""
    log_level = get_log_level()

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in _stdlib_handlers(log_level):
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(renders_json()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
