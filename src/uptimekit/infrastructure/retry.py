"""Retry policy for API calls using tenacity.

This module classifies methods, statuses and transport failures, computes
jittered exponential backoff and builds the tenacity controller that drives the
request executor's attempt loop.
"""

from __future__ import annotations

import errno
import logging
import random
import threading
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Iterator, Optional

import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
)
from urllib3.exceptions import ProtocolError

from uptimekit.domain.config.retry import RetryConfig
from uptimekit.infrastructure.errors import APIStatusError, TransportError, describe_error

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "DELETE", "HEAD", "OPTIONS"})

RETRYABLE_STATUSES = frozenset({408, 425, 429, 500, 502, 503, 504})

TRANSIENT_ERRNOS = frozenset(
    code
    for code in (
        getattr(errno, name, None)
        for name in (
            "ECONNRESET",
            "ECONNABORTED",
            "ECONNREFUSED",
            "EPIPE",
            "ENETDOWN",
            "ENETUNREACH",
            "EHOSTDOWN",
            "EHOSTUNREACH",
        )
    )
    if code is not None
)


def is_idempotent(method: str) -> bool:
    """Check if a method may be retried without changing the outcome"""
    return method.upper() in IDEMPOTENT_METHODS


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUSES


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception and everything it wraps.

    requests and urllib3 nest the socket error in ``args``, ``reason``,
    ``__cause__`` or ``__context__`` depending on where it was raised.
    """
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = [current.__cause__, current.__context__, getattr(current, "reason", None)]
        linked.extend(current.args)
        pending.extend(x for x in linked if isinstance(x, BaseException))


def is_transient_transport_error(exc: BaseException) -> bool:
    """Check if a transport failure is worth retrying

    Timeouts, truncated streams and connection reset/aborted/refused, broken
    pipe, network or host down/unreachable are transient. TLS failures and
    malformed requests are not.

    Args:
        exc: Exception raised by the transport

    Returns:
        True if the failure is transient
    """
    if isinstance(exc, requests.exceptions.SSLError):
        return False
    if isinstance(exc, (requests.exceptions.Timeout, requests.exceptions.ChunkedEncodingError)):
        return True
    for cause in _iter_causes(exc):
        if isinstance(cause, (ProtocolError, TimeoutError)):
            return True
        if isinstance(cause, OSError) and cause.errno in TRANSIENT_ERRNOS:
            return True
        if isinstance(cause, (ConnectionResetError, ConnectionAbortedError,
                              ConnectionRefusedError, BrokenPipeError)):
            return True
    return False


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """Parse a Retry-After header value into a delay in seconds

    Args:
        value: Header value (integer seconds or HTTP-date)
        now: Reference time for HTTP-dates (default: current UTC time)

    Returns:
        Positive delay in seconds, or None if absent, unparsable or not positive
    """
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(int(value))
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            return None
        if when is None:
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - (now or datetime.now(timezone.utc))).total_seconds()
    if seconds <= 0:
        return None
    return seconds


class BackoffPolicy:
    """Exponential backoff with symmetric jitter.

    ``delay(n) = base_delay * 2**min(n, max_exponent)`` shifted by a uniform
    offset within ``+/- jitter * delay``. The random source is owned by the
    policy so tests can seed it; a lock makes it safe to share between threads.
    """

    def __init__(
        self,
        base_delay: float = 0.2,
        max_exponent: int = 6,
        jitter: float = 0.25,
        rng: Optional[random.Random] = None,
    ):
        self.base_delay = base_delay
        self.max_exponent = max_exponent
        self.jitter = jitter
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: RetryConfig, rng: Optional[random.Random] = None) -> "BackoffPolicy":
        return cls(
            base_delay=config.base_delay,
            max_exponent=config.max_exponent,
            jitter=config.jitter,
            rng=rng,
        )

    def delay(self, attempt: int) -> float:
        """Backoff delay in seconds after the given 0-indexed attempt"""
        exponent = min(max(attempt, 0), self.max_exponent)
        delay = self.base_delay * (2 ** exponent)
        if self.jitter <= 0 or delay <= 0:
            return delay
        spread = delay * self.jitter
        with self._lock:
            offset = self._rng.uniform(-spread, spread)
        return max(delay + offset, 0.0)

    def wait(self, retry_state: RetryCallState) -> float:
        """tenacity wait strategy: server Retry-After first, computed backoff otherwise"""
        outcome = retry_state.outcome
        exc = outcome.exception() if outcome is not None else None
        if isinstance(exc, APIStatusError) and exc.retry_after is not None:
            return exc.retry_after
        return self.delay(retry_state.attempt_number - 1)


def should_retry(method: str) -> Callable[[BaseException], bool]:
    """Build the retry predicate for one logical call"""
    idempotent = is_idempotent(method)

    def _retry_condition(exception: BaseException) -> bool:
        if not idempotent:
            return False
        if isinstance(exception, TransportError):
            return exception.transient
        if isinstance(exception, APIStatusError):
            return is_retryable_status(exception.status_code)
        return False

    return _retry_condition


def build_retrying(
    method: str,
    max_attempts: int,
    backoff: BackoffPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> Retrying:
    """Create the tenacity controller for one logical call.

    Args:
        method: HTTP method of the call
        max_attempts: Attempt cap (first try included)
        backoff: Backoff policy for the delay between attempts
        sleep: Sleep function (injectable for tests)

    Returns:
        A ``Retrying`` that raises ``tenacity.RetryError`` once the cap is hit
        and re-raises non-retryable errors as-is
    """

    def _before_sleep_log(retry_state: RetryCallState) -> None:
        if retry_state.outcome is None:
            return
        exception = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"{method} attempt {retry_state.attempt_number}/{max_attempts} failed: {describe_error(exception)}. "
            f"Retrying in {delay:.2f}s..."
        )

    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=backoff.wait,
        retry=retry_if_exception(should_retry(method)),
        sleep=sleep,
        before_sleep=_before_sleep_log,
        reraise=False,
    )
