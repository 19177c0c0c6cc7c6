"""
djust-datastar: Datastar server-sent events for Django.

Builds Datastar SSE events (patch elements, patch signals, execute script)
and delivers each one to a set of open client connections::

    from djust_datastar import get_datastar, PatchMode

    datastar = get_datastar()
    result = (
        datastar.patch_elements(connections)
        .template("dashboard/card")
        .attribute("card", card)
        .patch_mode(PatchMode.REPLACE)
        .emit()
    )
    for connection in result.failed_connections:
        registry.discard(connection)
"""

from .builders import ExecuteScript, PatchElements, PatchSignals
from .connections import Connection, ConnectionSet, QueueConnection
from .dispatch import DeliveryFailure, DispatchResult, emit_events
from .envelope import PATCH_ELEMENTS, PATCH_SIGNALS, EventEnvelope
from .events import PatchMode
from .exceptions import (
    BuilderConsumedError,
    ConnectionClosedError,
    DatastarError,
    EmitError,
    EmptyConnectionSetError,
    MissingFieldError,
    SignalEncodingError,
)
from .factory import Datastar, get_datastar, reset_datastar
from .localization import DjangoMessageSource, Localizer
from .sse import sse_comment, sse_response

__version__ = "0.1.0"

__all__ = [
    "Datastar",
    "get_datastar",
    "reset_datastar",
    "PatchElements",
    "PatchSignals",
    "ExecuteScript",
    "PatchMode",
    "Connection",
    "ConnectionSet",
    "QueueConnection",
    "EventEnvelope",
    "PATCH_ELEMENTS",
    "PATCH_SIGNALS",
    "emit_events",
    "DispatchResult",
    "DeliveryFailure",
    "Localizer",
    "DjangoMessageSource",
    "sse_response",
    "sse_comment",
    "DatastarError",
    "MissingFieldError",
    "EmptyConnectionSetError",
    "BuilderConsumedError",
    "SignalEncodingError",
    "ConnectionClosedError",
    "EmitError",
]
