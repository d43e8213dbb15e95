"""Error types raised by the API access layer.

Everything derives from ``APIError`` (a ``RuntimeError``), so callers that only
care about "the API call failed" can catch one type, while callers that need
the status code or the retry history can inspect the concrete subclass.
"""

from __future__ import annotations

from typing import Optional

NOT_FOUND_STATUSES = (404, 410)


class APIError(RuntimeError):
    """Base class for API access failures."""


class TransportError(APIError):
    """Connection-level failure before any response was obtained."""

    def __init__(self, method: str, url: str, cause: BaseException, transient: bool = False):
        self.method = method
        self.url = url
        self.cause = cause
        self.transient = transient
        super().__init__(f"request failed: {method} {url}: {cause}")


class APIStatusError(APIError):
    """Non-2xx response that was not retried away."""

    def __init__(self, status_code: int, body: str = "", retry_after: Optional[float] = None):
        self.status_code = status_code
        self.body = body
        self.retry_after = retry_after
        super().__init__(f"API request failed with status {status_code}: {body}")


class RetryExhaustedError(APIError):
    """All attempts of an idempotent call failed."""

    def __init__(self, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"request failed after {attempts} attempts: {last_error}")

    @property
    def status_code(self) -> Optional[int]:
        return status_code_of(self.last_error)


class ResponseDecodeError(APIError):
    """Response body could not be decoded into the expected model."""

    def __init__(self, what: str, cause: BaseException, body: bytes = b""):
        self.cause = cause
        self.body = body
        super().__init__(f"failed to decode {what} response: {cause}")


class FallbackError(APIError):
    """Single-resource GET failed and the list fallback failed as well."""

    def __init__(self, resource: str, primary: BaseException, fallback: BaseException):
        self.resource = resource
        self.primary = primary
        self.fallback = fallback
        super().__init__(
            f"failed to get {resource}: {primary} "
            f"(fallback list request also failed: {fallback})"
        )


class FallbackNotFoundError(APIError):
    """List fallback succeeded but did not contain the requested identifier."""

    def __init__(self, resource: str, primary: BaseException, resource_id: int, listed: int):
        self.resource = resource
        self.primary = primary
        self.resource_id = resource_id
        self.listed = listed
        super().__init__(
            f"failed to get {resource}: {primary} "
            f"(fallback list succeeded but {resource} id {resource_id} "
            f"was not found among {listed} listed)"
        )


class WaitDeletedError(APIError):
    """Deletion could not be confirmed."""

    def __init__(self, path: str, reason: str, polls: int):
        self.path = path
        self.polls = polls
        super().__init__(f"{reason} waiting for delete of {path} after {polls} polls")


class DeleteTimeoutError(WaitDeletedError):
    def __init__(self, path: str, polls: int):
        super().__init__(path, "timeout", polls)


class DeleteCancelledError(WaitDeletedError):
    def __init__(self, path: str, polls: int):
        super().__init__(path, "cancelled", polls)


def status_code_of(error: Optional[BaseException]) -> Optional[int]:
    """Return the HTTP status carried by an error, unwrapping retry exhaustion."""
    if isinstance(error, APIStatusError):
        return error.status_code
    if isinstance(error, RetryExhaustedError):
        return status_code_of(error.last_error)
    return None


def describe_error(error: Optional[BaseException]) -> str:
    """Short log-safe description of an error.

    Status errors are reduced to their status code; the raw body stays on the
    exception and is only logged redacted, at DEBUG.
    """
    if isinstance(error, APIStatusError):
        return f"API request failed with status {error.status_code}"
    if isinstance(error, FallbackError):
        return (
            f"failed to get {error.resource}: {describe_error(error.primary)} "
            f"(fallback list request also failed: {describe_error(error.fallback)})"
        )
    if isinstance(error, FallbackNotFoundError):
        return (
            f"failed to get {error.resource}: {describe_error(error.primary)} "
            f"(fallback list succeeded but {error.resource} id {error.resource_id} "
            f"was not found among {error.listed} listed)"
        )
    if isinstance(error, RetryExhaustedError):
        return f"request failed after {error.attempts} attempts: {describe_error(error.last_error)}"
    return str(error)


def is_not_found(error: Optional[BaseException]) -> bool:
    """Check if an error means the resource is gone (404 Not Found or 410 Gone)."""
    return status_code_of(error) in NOT_FOUND_STATUSES
