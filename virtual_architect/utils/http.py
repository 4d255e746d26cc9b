"""Send one API request, optionally retrying failures that are worth repeating."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

_TRANSIENT_STATUS_CODES = frozenset({502, 503, 504})


class RetryConfig:
    """Attempt budget for one call; the default single attempt never retries."""

    def __init__(self, *, attempts: int = 1, backoff_seconds: float = 1.0) -> None:
        self.attempts = max(1, attempts)
        self.backoff_seconds = backoff_seconds


def is_transient(exc: httpx.HTTPError) -> bool:
    """Gateway errors and transport failures may succeed on a second try; 4xx never do."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _TRANSIENT_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


async def request_with_retry(
    func: Callable[..., Awaitable[httpx.Response]],
    *args,
    retry_config: RetryConfig | None = None,
    **kwargs,
) -> httpx.Response:
    """Return a successful response or raise the last ``httpx.HTTPError``."""
    config = retry_config or RetryConfig()
    for attempt in range(1, config.attempts + 1):
        try:
            response = await func(*args, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as exc:
            if attempt >= config.attempts or not is_transient(exc):
                raise
            delay = config.backoff_seconds * attempt
            logger.warning(
                "Transient API failure (attempt %d/%d), retrying in %.1fs: %s",
                attempt,
                config.attempts,
                delay,
                exc,
            )
            await asyncio.sleep(delay)
    raise RuntimeError("Request loop ended without a response")


__all__ = ["RetryConfig", "is_transient", "request_with_retry"]
