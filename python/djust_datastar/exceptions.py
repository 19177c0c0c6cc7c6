"""
Exceptions raised by djust-datastar.

Two kinds of fault exist:

- Programming errors (a required field was never set, no connections were
  given, a builder was emitted twice). These are raised synchronously before
  anything is sent.
- Delivery faults (a connection refused the frame). These never abort an
  emit; they are collected in a ``DispatchResult`` and only become an
  ``EmitError`` when the caller asks for it with ``raise_for_failures()``.
"""

from typing import Iterable, Optional


class DatastarError(Exception):
    """Base exception for djust-datastar errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class MissingFieldError(DatastarError, ValueError):
    """Raised by ``emit()`` when a field the event kind requires is not set."""

    def __init__(self, event_kind: str, field: str, hint: Optional[str] = None):
        message = f"{event_kind} cannot be emitted without {field}."
        super().__init__(message, hint)
        self.event_kind = event_kind
        self.field = field


class EmptyConnectionSetError(DatastarError, ValueError):
    """Raised when a builder is created without any target connection."""

    def __init__(self):
        message = "At least one connection is required to emit a Datastar event."
        hint = (
            "\n    Pass a single connection or a non-empty iterable:\n"
            "        datastar.patch_signals(connection).signal('count', 1).emit()"
        )
        super().__init__(message, hint)


class BuilderConsumedError(DatastarError, RuntimeError):
    """Raised when ``emit()`` is called a second time on the same builder."""

    def __init__(self, event_kind: str):
        message = f"This {event_kind} builder has already been emitted."
        hint = "Obtain a fresh builder from the Datastar factory for every event."
        super().__init__(message, hint)


class SignalEncodingError(DatastarError):
    """Raised when the signal mapping cannot be converted to JSON."""


class ConnectionClosedError(DatastarError):
    """Raised by a connection that no longer accepts frames."""


class EmitError(DatastarError):
    """
    One or more connections failed to receive an event.

    ``connections`` holds the connections that failed, so callers can drop
    them from future connection sets.
    """

    def __init__(self, message: str, connections: Iterable):
        super().__init__(message)
        self.connections = tuple(connections)


__all__ = [
    "DatastarError",
    "MissingFieldError",
    "EmptyConnectionSetError",
    "BuilderConsumedError",
    "SignalEncodingError",
    "ConnectionClosedError",
    "EmitError",
]
