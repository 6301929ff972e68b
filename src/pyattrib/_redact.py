"""Helpers for safe debug logging.

Sinks carry credentials (API secrets, client tokens, dev keys) and ad-hoc
events may carry raw user identifiers.  :func:`redact_for_log` masks both
before anything is emitted at DEBUG level.

``hashed_email`` is left readable: it is already a truncated one-way
digest, and it is the value needed to correlate an event across the
three backends.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "access_token",
        "authentication",
        "authorization",
        "cookie",
        "password",
        "token",
        # Raw user and device identifiers
        "email",
        "anon_id",
        "app_instance_id",
        "appsflyer_id",
        "advertiser_id",
    }
)

# Credential-shaped keys: api_secret, client_token, dev_key, ...
_SENSITIVE_KEY_SUFFIXES: tuple[str, ...] = ("_secret", "_token", "_key")

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return lowered in _SENSITIVE_VALUE_KEYS or lowered.endswith(_SENSITIVE_KEY_SUFFIXES)


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if _EMAIL_RE.fullmatch(value.strip()):
            return REDACTED
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        return {
            str(k): REDACTED
            if _is_sensitive_key(str(k))
            else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, bytearray):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
