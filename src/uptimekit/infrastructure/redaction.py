"""Redaction of secrets in request/response payloads before they are logged.

Redaction is key-based and structure-agnostic: any mapping key, at any depth,
whose name looks sensitive has its value replaced, so dynamically shaped
payloads (webhook configs, custom settings) are covered without knowing their
field paths.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"

SENSITIVE_KEY_SUBSTRINGS = (
    "password",
    "token",
    "secret",
    "authorization",
    "api_key",
    "apikey",
    "client_secret",
    "http_password",
)

SENSITIVE_HEADERS = ("authorization", "proxy-authorization")


def is_sensitive_key(key: Any) -> bool:
    """Check if a mapping key names a secret (case-insensitive substring match)"""
    lowered = str(key).lower()
    return any(s in lowered for s in SENSITIVE_KEY_SUBSTRINGS)


def redact(value: Any) -> Any:
    """Redact sensitive fields of a parsed JSON value in place.

    Mappings and lists are walked with an explicit stack, so nesting depth is
    only bounded by memory. Primitives are returned unchanged.

    Args:
        value: Parsed JSON value (dict, list, str, int, float, bool or None)

    Returns:
        The same value, with sensitive mapping entries replaced by ``REDACTED``
    """
    stack: List[Any] = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            for key, child in node.items():
                if is_sensitive_key(key):
                    node[key] = REDACTED
                elif isinstance(child, (dict, list)):
                    stack.append(child)
        elif isinstance(node, list):
            stack.extend(child for child in node if isinstance(child, (dict, list)))
    return value


def clip(text: str, max_bytes: int) -> str:
    """Truncate text to a UTF-8 byte budget, noting how much was dropped.

    Args:
        text: Text to clip
        max_bytes: Byte budget (<= 0 disables clipping)

    Returns:
        Text unchanged if within budget, otherwise truncated with a marker
    """
    encoded = text.encode("utf-8")
    if max_bytes <= 0 or len(encoded) <= max_bytes:
        return text
    head = encoded[:max_bytes].decode("utf-8", errors="ignore")
    return f"{head}… [{len(encoded) - max_bytes} bytes clipped]"


def redact_json(raw: bytes, max_bytes: int) -> str:
    """Produce a secret-free, size-bounded log string from a raw JSON body.

    Args:
        raw: Raw body bytes
        max_bytes: Output byte budget (<= 0 disables clipping)

    Returns:
        Redacted compact JSON (possibly clipped), ``""`` for an empty body, or a
        size-only marker when the body is not JSON
    """
    if not raw:
        return ""
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        # Never echo raw bytes, only their size.
        return f"<non-json body: {len(raw)} bytes>"
    redact(value)
    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (ValueError, RecursionError):
        return f"<unserializable body: {len(raw)} bytes>"
    return clip(text, max_bytes)


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy headers without credentials"""
    return {k: v for k, v in headers.items() if k.lower() not in SENSITIVE_HEADERS}
