"""Structured logging for the registry service, built on structlog."""

import logging
import sys

import structlog

# Libraries that log every statement or connection at INFO/DEBUG
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "httpx")


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Route stdlib and structlog records through one stdout handler.

    Registry modules log through ``logging.getLogger(__name__)`` with ``extra``
    fields (package ids, packager ids); ``ExtraAdder`` lifts those into the
    rendered event. Calling this again replaces the previous handler.

    Raises:
        ValueError: if ``log_level`` is not a stdlib level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {log_level!r}")

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.ExtraAdder(),
    ]
    if json_output:
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_output),
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_request_context(trace_id: str, **fields) -> None:
    """Bind the request trace id (and any extra fields) to the current async context."""
    structlog.contextvars.bind_contextvars(trace_id=trace_id, **fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
