"""
JSON encoding of signal values.

Signals are sent as one compact JSON object per event. ``DatastarJSONEncoder``
covers the Python and Django types that commonly end up in signal values.
"""

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Type
from uuid import UUID

from django.utils.duration import duration_iso_string
from django.utils.functional import Promise


class DatastarJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for signal values.

    Automatically converts:
    - datetime/date/time → ISO format strings
    - timedelta → ISO 8601 duration
    - UUID → string
    - Decimal → float
    - lazy translation strings → string
    - sets and tuples → list
    """

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, (date, time)):
            return obj.isoformat()
        if isinstance(obj, timedelta):
            return duration_iso_string(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, Promise):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        return super().default(obj)


def to_json(value: Any, encoder: Type[json.JSONEncoder] = DatastarJSONEncoder) -> str:
    """Encode ``value`` as compact JSON (no whitespace between tokens)."""
    return json.dumps(value, cls=encoder, separators=(",", ":"), ensure_ascii=False)


def make_json_encoder(encoder: Type[json.JSONEncoder]):
    """Return a ``value -> str`` callable bound to ``encoder``."""

    def encode(value: Any) -> str:
        return to_json(value, encoder=encoder)

    encode.encoder = encoder
    return encode
