"""Redaction helpers for safe logging.

Reservation requests carry a requester name and phone number; neither may
reach the logs. Anything user-supplied goes through these helpers first.
"""

import re
from typing import Any

_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"

# Request fields that identify the requester and are never logged as values
PII_FIELDS = frozenset({"name", "phone", "age", "gender"})


def redact_string(value: str) -> str:
    """Redact PII patterns from a string."""
    result = _PHONE_PATTERN.sub(_REDACTED, value)
    result = _EMAIL_PATTERN.sub(_REDACTED, result)
    return result


def redact_value(value: Any) -> str:
    """Redact any value for safe logging. Returns string representation."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        # structure only
        return f"dict(keys={list(value.keys())})"
    if isinstance(value, (list, tuple)):
        return f"list(len={len(value)})"
    return f"<{type(value).__name__}>"


def safe_request_fields(payload: dict[str, Any]) -> dict[str, str]:
    """Loggable view of a reservation request body.

    PII fields are reduced to presence markers; the rest is redacted.
    """
    out: dict[str, str] = {}
    for key, value in payload.items():
        if key in PII_FIELDS:
            out[key] = "present" if value not in (None, "") else "absent"
        else:
            out[key] = redact_value(value)
    return out
