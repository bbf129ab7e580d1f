# ABOUTME: Retry policy for wiki page fetches using the tenacity library
# ABOUTME: Maps httpx failures onto fetch errors and retries only the transient ones with exponential backoff

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from villain_timeline.errors import FetchError, TransientFetchError
from villain_timeline.utils.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def convert_http_error(e: Exception) -> FetchError:
    """Convert an httpx exception into a fetch error, flagging the ones worth retrying."""
    if isinstance(e, FetchError):
        return e
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        message = f"HTTP Error {status}: {e}"
        if status in RETRYABLE_STATUS_CODES:
            return TransientFetchError(message)
        return FetchError(message)
    if isinstance(e, httpx.TimeoutException):
        return TransientFetchError(f"Request timeout: {e}")
    if isinstance(e, httpx.TransportError):
        return TransientFetchError(f"Connection failed: {e}")
    return FetchError(f"Fetch failed: {e}")


def _log_retry(retry_state) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying fetch",
        attempt=retry_state.attempt_number,
        error=str(exc) if exc else None,
        error_type=type(exc).__name__ if exc else None,
    )


def fetch_retrying(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
) -> AsyncRetrying:
    """Build the tenacity controller used around a single page fetch.

    Waits double from min_wait up to max_wait. Only TransientFetchError is
    retried; the final error is re-raised as-is.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(TransientFetchError),
        before_sleep=_log_retry,
        reraise=True,
    )
