"""Masking of credentials in debug logs.

Every request carries the session token in a header, and login-related
payloads may echo it back. Only decoded JSON and header mappings are ever
passed through here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

_REDACTED = "<redacted>"

# Default header/field names holding a credential. The configured auth
# header is added per call by the transport.
_SECRET_KEYS: frozenset[str] = frozenset({"x-auth-token", "token", "authorization", "cookie", "password"})


def _mask(value: Any, secret_keys: frozenset[str], max_string: int) -> Any:
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED if str(key).lower() in secret_keys else _mask(item, secret_keys, max_string)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_mask(item, secret_keys, max_string) for item in value]
    return value


def redact_for_log(value: Any, *, max_string: int = 512, extra_keys: Iterable[str] = ()) -> Any:
    """Return a copy of a JSON value or header mapping with credentials masked.

    Key matching is case-insensitive; ``extra_keys`` extends the default set.
    """
    secret_keys = _SECRET_KEYS | {key.lower() for key in extra_keys}
    return _mask(value, secret_keys, max_string)
