"""Process-wide logging for the services, the gateway and the storefront.

The stdlib root logger owns the sinks: stdout, ``<prefix>.log`` and
``<prefix>_error.log`` under the log directory, both rotated at 10 MB.
structlog feeds it: JSON lines in production and staging, the coloured
console renderer with rich tracebacks everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = {"production", "staging"}

# Chatty at DEBUG/INFO; only their warnings are worth keeping
_QUIET_LOGGERS = ("asyncio", "httpcore", "httpx", "protean", "uvicorn.access")

_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_KEEP = 5

_configured = False


def environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def resolve_level() -> str:
    """``LOG_LEVEL`` wins; otherwise the environment decides (INFO when unknown)."""
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(environment(), "INFO")).upper()


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_KEEP, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _install_sinks(level: str, log_dir: str | None, prefix: str) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setLevel(level)
    if log_dir:
        directory = Path(os.getenv("LOG_DIR", log_dir))
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_file(directory / f"{prefix}.log", level))
        handlers.append(_rotating_file(directory / f"{prefix}_error.log", logging.ERROR))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = handlers

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _processors(json_output: bool) -> list:
    chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        chain += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer(ensure_ascii=False)]
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
            )
        )
    return chain


def configure_logging(log_dir: str | None = "logs", log_file_prefix: str = "storefront") -> None:
    """Set up sinks and structlog once per process; later calls do nothing.

    Args:
        log_dir: directory for the rotating files (``LOG_DIR`` overrides it);
            ``None`` logs to stdout only.
        log_file_prefix: file name stem, one per process kind.
    """
    global _configured
    if _configured:
        return

    _install_sinks(resolve_level(), log_dir, log_file_prefix)
    structlog.configure(
        processors=_processors(json_output=environment() in _JSON_ENVIRONMENTS),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def request_context(**values) -> Iterator[None]:
    """Bind ``values`` to every log line emitted until the block exits.

    Context from a previous request on the same task never survives.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        structlog.contextvars.clear_contextvars()
