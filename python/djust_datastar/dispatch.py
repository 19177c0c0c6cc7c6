"""
Fan-out delivery of a finished envelope to a connection set.

Every connection gets exactly one send attempt per event. A connection that
raises is told to ``fail()`` and recorded; the remaining connections still
receive the frame. Nothing is raised for delivery faults: the caller gets a
``DispatchResult`` and decides what to do with the failed connections.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Tuple

from .connections import ConnectionSet
from .envelope import EventEnvelope
from .exceptions import EmitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryFailure:
    """A connection that did not accept the frame, and why."""

    connection: Any
    error: BaseException


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching one event to a connection set."""

    event_id: str
    event_name: str
    delivered: Tuple[Any, ...] = ()
    failures: Tuple[DeliveryFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_connections(self) -> Tuple[Any, ...]:
        return tuple(f.connection for f in self.failures)

    def raise_for_failures(self) -> "DispatchResult":
        """
        Raise a single ``EmitError`` if any connection failed.

        Returns the result itself when every delivery succeeded, so it can be
        chained after ``emit()``.
        """
        if self.failures:
            raise EmitError(
                f"Failed to send {self.event_name} event {self.event_id} "
                f"to {len(self.failures)} connection(s)",
                self.failed_connections,
            )
        return self


def emit_events(envelope: EventEnvelope, connections: ConnectionSet) -> DispatchResult:
    """
    Send ``envelope`` to every connection in ``connections``.

    Args:
        envelope: A named envelope with its data lines in place
        connections: The targets, each attempted exactly once

    Returns:
        DispatchResult listing delivered and failed connections
    """
    frame = envelope.to_frame()

    delivered = []
    failures = []
    for connection in connections:
        try:
            connection.send(frame)
        except Exception as exc:
            logger.warning(
                "Failed to send %s event %s to %r: %s",
                envelope.name,
                envelope.id,
                connection,
                exc,
            )
            _mark_failed(connection, exc)
            failures.append(DeliveryFailure(connection, exc))
        else:
            delivered.append(connection)

    logger.debug(
        "Dispatched %s event %s: %d delivered, %d failed",
        envelope.name,
        envelope.id,
        len(delivered),
        len(failures),
    )
    return DispatchResult(
        event_id=envelope.id,
        event_name=envelope.name,
        delivered=tuple(delivered),
        failures=tuple(failures),
    )


def _mark_failed(connection: Any, exc: BaseException) -> None:
    fail = getattr(connection, "fail", None)
    if fail is None:
        return
    try:
        fail(exc)
    except Exception:
        # The remaining connections must still be attempted.
        logger.exception("Error while marking %r as failed", connection)
