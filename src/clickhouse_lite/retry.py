"""
Bounded retry for HTTP-level failures.

Only non-2xx responses are retried. Exceptions raised by the transport
(connection refused, DNS, timeouts) are not caught here and reach the caller
on the first occurrence.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from clickhouse_lite.errors import QueryTimeoutError, ServerError
from clickhouse_lite.log import get_default_logger
from clickhouse_lite.transport import TransportResult
from clickhouse_lite.utils import truncate

logger = get_default_logger(__name__)

DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how fast, a rejected request is resent.

    The default retries immediately, up to three times, so a call makes at
    most four attempts. Set `backoff` to wait between attempts; the delay
    grows by `backoff_multiplier` and is capped at `max_backoff`.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: float = 0.0
    backoff_multiplier: float = 2.0
    max_backoff: float = 10.0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.backoff < 0 or self.max_backoff < 0:
            raise ValueError("backoff delays must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def should_retry(self, result: TransportResult, retries_done: int) -> bool:
        return not result.is_success and retries_done < self.max_retries

    def delay(self, retry_number: int) -> float:
        """Seconds to wait before retry number `retry_number` (1-based)."""
        if self.backoff <= 0:
            return 0.0
        return min(
            self.backoff * self.backoff_multiplier ** (retry_number - 1),
            self.max_backoff,
        )


class Deadline:
    """Overall time budget of a single client call, None meaning unbounded."""

    def __init__(self, seconds: float | None = None):
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return max(self._expires_at - time.monotonic(), 0.0)

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, wait: float = 0.0) -> None:
        """Raise unless more than `wait` seconds are left."""
        remaining = self.remaining()
        if remaining is not None and remaining <= wait:
            raise QueryTimeoutError(f"Deadline of {self.seconds}s exceeded")


def _exhausted(
    result: TransportResult, statement: str | None, attempts: int
) -> ServerError:
    logger.error(
        f"Giving up after {attempts} attempt(s): [{result.status_code}] "
        f"{truncate(result.text)}"
    )
    return ServerError(
        status_code=result.status_code,
        message=result.text,
        statement=statement,
        attempts=attempts,
    )


def _log_retry(result: TransportResult, retry_number: int, max_retries: int) -> None:
    logger.warning(f"Error: [{result.status_code}] {truncate(result.text)}")
    logger.warning(f"Retrying {retry_number}/{max_retries}")


def send_with_retry(
    send: Callable[[float | None], TransportResult],
    policy: RetryPolicy,
    statement: str | None = None,
    deadline: Deadline | None = None,
) -> TransportResult:
    """Call `send` until it returns a 2xx result or the policy gives up.

    Args:
        send: performs one attempt; receives the timeout left for it.
        policy: retry budget and backoff.
        statement: attached to the ServerError raised on exhaustion.
        deadline: caller's overall budget, checked before every attempt and
            handed to httpx as the timeout of each phase (connect, write,
            read, pool). A response trickling in slowly can therefore run
            past it; the async loop bounds the whole attempt instead.

    Raises:
        ServerError: the last attempt was still rejected.
        QueryTimeoutError: the deadline expired between attempts.
    """
    deadline = deadline or Deadline()
    retries = 0
    while True:
        deadline.check()
        result = send(deadline.remaining())
        if result.is_success:
            return result
        if not policy.should_retry(result, retries):
            raise _exhausted(result, statement, retries + 1)
        retries += 1
        _log_retry(result, retries, policy.max_retries)
        delay = policy.delay(retries)
        deadline.check(delay)
        if delay > 0:
            time.sleep(delay)


async def _bounded_attempt(
    send: Callable[[float | None], Awaitable[TransportResult]],
    deadline: Deadline,
) -> TransportResult:
    remaining = deadline.remaining()
    if remaining is None:
        return await send(None)
    try:
        return await asyncio.wait_for(send(remaining), timeout=remaining)
    except asyncio.TimeoutError as e:
        raise QueryTimeoutError(f"Deadline of {deadline.seconds}s exceeded") from e


async def async_send_with_retry(
    send: Callable[[float | None], Awaitable[TransportResult]],
    policy: RetryPolicy,
    statement: str | None = None,
    deadline: Deadline | None = None,
) -> TransportResult:
    """Awaitable version of `send_with_retry`.

    Each attempt is additionally cancelled once the deadline runs out, so the
    whole call, slow responses included, stays within it.
    """
    deadline = deadline or Deadline()
    retries = 0
    while True:
        deadline.check()
        result = await _bounded_attempt(send, deadline)
        if result.is_success:
            return result
        if not policy.should_retry(result, retries):
            raise _exhausted(result, statement, retries + 1)
        retries += 1
        _log_retry(result, retries, policy.max_retries)
        delay = policy.delay(retries)
        deadline.check(delay)
        if delay > 0:
            await asyncio.sleep(delay)
