"""Query string and JSON encoding shared by every SS12000 request.

Query parameters follow the conventions SS12000 services expect:

- ``None`` values are left out entirely.
- Lists and tuples repeat the key once per item, in order
  (``expand=child&expand=owners``).
- Booleans are sent as lowercase ``true``/``false``.
- Dates and timestamps are sent as RFC 3339 strings. Naive ``datetime`` and
  ``time`` values are rejected with ``ValueError``, since RFC 3339 requires
  an offset; strings are passed through as given.
- Everything else is stringified and percent-encoded as a URI component.
"""

from __future__ import annotations

import json
import os
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import quote

# Conditional import of orjson to support faster JSON processing if available
try:  # pragma: no cover
    import orjson  # type: ignore

    if (
        os.environ.get("SS12000CLIENT_PREFER_ORJSON", "0") != "0"
    ):  # orjson is opt-in via env var
        _HAS_ORJSON = True
    else:
        _HAS_ORJSON = False

    def _orjson_loads(data):
        return orjson.loads(data)

    def _orjson_dumps(obj):
        return orjson.dumps(obj, default=_json_default)

    JSON_DECODE_ERRORS = (json.JSONDecodeError, UnicodeDecodeError, orjson.JSONDecodeError)  # type: ignore

except ImportError:
    _HAS_ORJSON = False
    JSON_DECODE_ERRORS = (json.JSONDecodeError, UnicodeDecodeError)  # type: ignore

CONTENT_TYPE_JSON = "application/json"


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    # bool must be checked before anything that would str() it
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, time)) and value.utcoffset() is None:
        raise ValueError(f"{value!r} has no UTC offset; RFC 3339 timestamps require one")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def encode_value(value: Any) -> str:
    """Stringify a scalar query value and percent-encode it as a URI component."""
    return quote(_stringify(value), safe="")


def encode_query_string(query_params: Optional[Mapping[str, Any]]) -> str:
    """Encode a query parameter mapping into a query string (without the leading ``?``).

    Args:
        query_params (Mapping[str, Any] | None): Parameter names mapped to a scalar,
            a list/tuple of scalars, or None.

    Returns:
        str: The encoded query string, or an empty string when nothing is left to send.

    Raises:
        ValueError: For a naive ``datetime`` or ``time`` value.

    Example:
        >>> encode_query_string({"expand": ["child", "owners"], "limit": 2, "pageToken": None})
        'expand=child&expand=owners&limit=2'
    """
    if not query_params:
        return ""
    pairs = []
    for key, value in query_params.items():
        if value is None:
            continue
        encoded_key = quote(str(key), safe=".")
        if isinstance(value, (list, tuple)):
            pairs.extend(f"{encoded_key}={encode_value(item)}" for item in value if item is not None)
        else:
            pairs.append(f"{encoded_key}={encode_value(value)}")
    return "&".join(pairs)


def _json_default(obj: Any) -> Any:
    """Fallback serializer for values the JSON encoder does not know."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dump_json(payload: Any) -> bytes:
    """Serialize a request body to UTF-8 encoded JSON.

    Raises:
        TypeError: If the payload contains a value that cannot be serialized.
    """
    if _HAS_ORJSON:
        return _orjson_dumps(payload)
    return json.dumps(payload, default=_json_default, ensure_ascii=False).encode("utf-8")


def load_json(content: bytes) -> Any:
    """Parse a response body.

    Raises:
        json.JSONDecodeError, UnicodeDecodeError: For bodies that are not valid JSON.
    """
    if _HAS_ORJSON:
        return _orjson_loads(content)
    return json.loads(content)
