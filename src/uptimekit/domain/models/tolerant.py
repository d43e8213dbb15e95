"""Tolerant field types for values whose wire shape differs between API versions.

The API is inconsistent about some scalar fields: status page feature flags come
back as booleans or as ``"true"``/``"false"`` strings, and identifiers come back
as strings or numbers. These annotated types inspect the parsed JSON kind and
normalize to one in-memory form.
"""

from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def parse_tolerant_bool(value: Any) -> Optional[bool]:
    """Decode a bool-or-string wire value

    Args:
        value: Parsed JSON value

    Returns:
        True/False, or None for JSON null

    Raises:
        ValueError: For strings other than "true"/"false" and for any other JSON kind
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token == "true":
            return True
        if token == "false":
            return False
        raise ValueError(f"invalid boolean string: {value!r}")
    raise ValueError(f"unsupported JSON for boolean: {type(value).__name__}")


def parse_tolerant_id(value: Any) -> str:
    """Decode a string-or-number identifier

    Args:
        value: Parsed JSON value

    Returns:
        The string as-is, the decimal form of an integer (integral floats such
        as 1e20 included), Python's float form otherwise, or "" for null/empty

    Raises:
        ValueError: For booleans, arrays and objects
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid identifier")
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"unsupported JSON for identifier: {type(value).__name__}")


TolerantBool = Annotated[Optional[bool], BeforeValidator(parse_tolerant_bool)]
TolerantID = Annotated[str, BeforeValidator(parse_tolerant_id)]
