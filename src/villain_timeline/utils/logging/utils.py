# ABOUTME: structlog helpers binding issue, pipeline and fetch context to log events
# ABOUTME: Timing decorators for pipeline operations and page fetches, plus context managers for bound loggers

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "villain_timeline"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module unless a name is given."""
    if name is None:
        caller = inspect.currentframe()
        caller = caller.f_back if caller else None
        name = caller.f_globals.get("__name__") if caller else None

    return structlog.get_logger(name or ROOT_LOGGER_NAME)


def generate_operation_id() -> str:
    """Short random id correlating the log lines of one operation."""
    return uuid.uuid4().hex[:8]


def _elapsed(started: float) -> float:
    return round(time.perf_counter() - started, 3)


def _log_failure(log: structlog.stdlib.BoundLogger, event: str, started: float, error: Exception) -> None:
    log.error(
        event,
        duration_seconds=_elapsed(started),
        error=str(error),
        error_type=type(error).__name__,
        success=False,
    )


def with_operation_context(operation: str, **context) -> Callable[[F], F]:
    """Log start, completion time and failure of a synchronous pipeline step.

    Args:
        operation: Name used in the start/finish events
        **context: Extra fields bound to every event of the call
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                operation=operation,
                operation_id=generate_operation_id(),
                function=func.__name__,
                **context,
            )
            log.info(f"Starting {operation}")
            started = time.perf_counter()

            try:
                outcome = func(*args, **kwargs)
            except Exception as e:
                _log_failure(log, f"Failed {operation}", started, e)
                raise

            log.info(f"Completed {operation}", duration_seconds=_elapsed(started), success=True)
            return outcome

        return wrapper  # type: ignore[return-value]

    return decorator


def _issue_key_from_call(args: tuple, kwargs: dict) -> int | None:
    if "issue_number" in kwargs:
        return kwargs["issue_number"]
    return next((arg for arg in args if isinstance(arg, int) and not isinstance(arg, bool)), None)


def log_fetch_call(source: str, **context) -> Callable[[F], F]:
    """Time an async page fetch and log its outcome, tagged with the issue being fetched.

    Args:
        source: Site the page comes from
        **context: Extra fields bound to the fetch events
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                source=source,
                call_id=generate_operation_id(),
                issue_key=_issue_key_from_call(args, kwargs),
                **context,
            )
            log.debug(f"Fetching from {source}")
            started = time.perf_counter()

            try:
                page = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(log, f"Fetch from {source} failed", started, e)
                raise

            log.info(f"Fetch from {source} succeeded", duration_seconds=_elapsed(started), success=True)
            return page

        return wrapper  # type: ignore[return-value]

    return decorator


class LogContext:
    """Bind fields to a logger for the duration of a with-block; failures escaping the block are logged."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **fields):
        self._base = logger
        self.fields = fields
        self.logger: structlog.stdlib.BoundLogger | None = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.logger = self._base.bind(**self.fields)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None or self.logger is None:
            return
        self.logger.error("Context operation failed", error=str(exc_val), error_type=exc_type.__name__)


def with_issue_context(issue_key: int) -> LogContext:
    """Logging context for work on a single issue page."""
    return LogContext(get_logger(ROOT_LOGGER_NAME), issue_key=issue_key, entity_type="issue")


def with_pipeline_context(pipeline_name: str, **context) -> LogContext:
    """Logging context for one CLI pipeline run, tagged with a fresh operation id.

    Args:
        pipeline_name: Pipeline being run (scrape, chart)
        **context: Extra fields such as the issue range
    """
    return LogContext(
        get_logger(ROOT_LOGGER_NAME),
        pipeline=pipeline_name,
        operation_id=generate_operation_id(),
        **context,
    )
