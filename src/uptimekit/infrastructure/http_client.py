"""HTTP request executor for the UptimeRobot API (requests + tenacity).

All physical HTTP exchanges go through ``APIClient.execute``: one logical call,
serialized once, retried with backoff when it is safe to do so.
"""

from __future__ import annotations

import json
import logging
import os
import random
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from pydantic import BaseModel
from tenacity import RetryError
from urllib3 import encode_multipart_formdata

from uptimekit.domain.config.api import DEFAULT_API_URL
from uptimekit.domain.config.diagnostics import DiagnosticsConfig
from uptimekit.domain.config.retry import RetryConfig
from uptimekit.infrastructure.errors import (
    APIError,
    APIStatusError,
    NOT_FOUND_STATUSES,
    RetryExhaustedError,
    TransportError,
    describe_error,
)
from uptimekit.infrastructure.redaction import redact_headers, redact_json
from uptimekit.infrastructure.retry import (
    BackoffPolicy,
    build_retrying,
    is_idempotent,
    is_transient_transport_error,
    parse_retry_after,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RedirectSafeSession(requests.Session):
    """Session that re-applies the client's headers on same-host redirects.

    Some deployments front the API with a redirecting gateway. ``requests``
    rebuilds the request on every hop; this hook makes sure the bearer
    credential and the configured default headers are present on the new hop
    whenever it stays on the same origin (an http to https upgrade included).
    Hops that requests strips credentials from (another host or port, or a
    downgrade to plain http) get nothing re-applied.
    """

    def __init__(self, header_source: Optional[Callable[[], Mapping[str, str]]] = None):
        super().__init__()
        self._header_source = header_source

    def rebuild_auth(self, prepared_request, response):
        super().rebuild_auth(prepared_request, response)
        previous = response.request
        if previous is None or self.should_strip_auth(previous.url, prepared_request.url):
            return
        headers = dict(self._header_source()) if self._header_source else {}
        auth = previous.headers.get("Authorization")
        if auth:
            headers.setdefault("Authorization", auth)
        for name, value in headers.items():
            if name.lower() == "content-type":
                # rebuild_method may have turned the hop into a body-less GET
                continue
            if name not in prepared_request.headers:
                prepared_request.headers[name] = value


class APIClient:
    """Request executor for the UptimeRobot REST API.

    Owns the base URL, API key and default headers. Configuration is meant to be
    set up before the client is shared; during ``execute`` it is only read, so
    one instance can serve concurrent calls from several threads.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        retry_config: Optional[RetryConfig] = None,
        diagnostics: Optional[DiagnosticsConfig] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        """Initialize API client

        Args:
            api_key: API key (default: from UPTIMEROBOT_API_KEY env)
            base_url: API base URL (default: from UPTIMEROBOT_API_URL env or the public v3 API)
            timeout: Transport timeout per attempt in seconds
            user_agent: User-Agent header value
            headers: Extra default headers, applied in order to every attempt
            retry_config: Retry configuration
            diagnostics: Body size limits for debug logging
            session: Transport session (default: RedirectSafeSession)
            sleep: Sleep function used between attempts (injectable for tests)
            rng: Random source for backoff jitter (injectable for tests)
        """
        self._api_key = api_key or os.getenv("UPTIMEROBOT_API_KEY")
        if not self._api_key:
            raise ValueError(
                "UptimeRobot API key is required. "
                "Set UPTIMEROBOT_API_KEY environment variable or provide in config."
            )
        self._base_url = (base_url or os.getenv("UPTIMEROBOT_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self._user_agent = user_agent
        self._headers: Dict[str, str] = dict(headers or {})
        self.retry_config = retry_config or RetryConfig()
        self.diagnostics = diagnostics or DiagnosticsConfig()
        self._backoff = BackoffPolicy.from_config(self.retry_config, rng=rng)
        self._sleep = sleep
        self._session = session or RedirectSafeSession(self._redirect_headers)

        logger.info(f"UptimeRobot API client initialized for {self._base_url}")

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, url: str) -> None:
        self._base_url = url.rstrip("/")

    def set_user_agent(self, user_agent: str) -> None:
        self._user_agent = user_agent

    def add_header(self, name: str, value: str) -> None:
        """Add a default header sent on every request (and every redirect hop)"""
        self._headers[name] = value

    def execute(self, method: str, path: str, body: Any = None) -> bytes:
        """Execute one logical API call with retry and backoff

        Args:
            method: HTTP method
            path: Path relative to the base URL (e.g. "/monitors/1")
            body: Optional JSON body (pydantic model, mapping or list)

        Returns:
            Raw response body (empty for DELETE answered with 404/410)

        Raises:
            TransportError: Connection failure that was not retried
            APIStatusError: Non-2xx response that was not retried
            RetryExhaustedError: Every attempt failed
        """
        payload = self._encode_body(body) if body is not None else None
        content_type = "application/json" if payload is not None else None
        return self._execute(method.upper(), path, payload, content_type)

    def execute_multipart(
        self,
        method: str,
        path: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """Execute a multipart/form-data call

        An empty string field value is sent as-is; the API reads it as "clear
        this asset".

        Args:
            method: HTTP method
            path: Path relative to the base URL
            fields: Text fields
            files: Field name -> local file path

        Returns:
            Raw response body

        Raises:
            APIError: If a file cannot be read, or as for ``execute``
        """
        parts: list = list((fields or {}).items())
        for name, file_path in (files or {}).items():
            try:
                data = Path(file_path).read_bytes()
            except OSError as e:
                raise APIError(f"open file {file_path}: {e}") from e
            parts.append((name, (os.path.basename(file_path), data)))
        payload, content_type = encode_multipart_formdata(parts)
        return self._execute(method.upper(), path, payload, content_type)

    def _encode_body(self, body: Any) -> bytes:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(body, separators=(",", ":")).encode("utf-8")

    def _redirect_headers(self) -> Dict[str, str]:
        headers = {}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        headers.update(self._headers)
        return headers

    def _build_headers(self, content_type: Optional[str]) -> Dict[str, str]:
        """Build request headers for one attempt.

        Standard headers win over configured defaults with the same name.
        """
        headers: Dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type
        headers["Accept"] = "application/json"
        headers["Authorization"] = f"Bearer {self._api_key}"
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        present = {k.lower() for k in headers}
        for name, value in self._headers.items():
            if name.lower() not in present:
                headers[name] = value
        return headers

    def _execute(
        self, method: str, path: str, payload: Optional[bytes], content_type: Optional[str]
    ) -> bytes:
        url = self._base_url + path
        retrying = build_retrying(
            method,
            self.retry_config.max_attempts,
            self._backoff,
            sleep=self._sleep,
        )
        try:
            return retrying(self._attempt, method, url, payload, content_type)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            attempts = e.last_attempt.attempt_number
            logger.error(f"{method} {url} failed after {attempts} attempts: {describe_error(last_error)}")
            raise RetryExhaustedError(attempts, last_error) from last_error

    def _attempt(
        self, method: str, url: str, payload: Optional[bytes], content_type: Optional[str]
    ) -> bytes:
        """Perform a single HTTP exchange and classify its outcome"""
        headers = self._build_headers(content_type)
        logger.debug(
            f"HTTP {method} {url} headers={redact_headers(headers)} "
            f"body={self._describe_request_body(payload, content_type)}"
        )

        start = time.monotonic()
        try:
            resp = self._session.request(
                method, url, data=payload, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            transient = is_transient_transport_error(e)
            logger.warning(
                f"HTTP {method} {url} transport error after "
                f"{(time.monotonic() - start) * 1000:.0f}ms "
                f"(idempotent={is_idempotent(method)}, transient={transient}): {e}"
            )
            raise TransportError(method, url, e, transient=transient) from e

        content = resp.content or b""
        logger.debug(
            f"HTTP {method} {url} -> {resp.status_code} "
            f"in {(time.monotonic() - start) * 1000:.0f}ms "
            f"request_id={resp.headers.get('X-Request-Id')} "
            f"rate_remaining={resp.headers.get('X-RateLimit-Remaining')} "
            f"body={redact_json(content, self.diagnostics.response_body_max_bytes)}"
        )

        if method == "DELETE" and resp.status_code in NOT_FOUND_STATUSES:
            return b""

        if 200 <= resp.status_code < 300:
            return content

        raise APIStatusError(
            resp.status_code,
            content.decode("utf-8", errors="replace"),
            retry_after=parse_retry_after(resp.headers.get("Retry-After")),
        )

    def _describe_request_body(self, payload: Optional[bytes], content_type: Optional[str]) -> str:
        if payload is None:
            return ""
        if content_type and content_type.startswith("multipart/"):
            return f"<multipart body: {len(payload)} bytes>"
        return redact_json(payload, self.diagnostics.request_body_max_bytes)
