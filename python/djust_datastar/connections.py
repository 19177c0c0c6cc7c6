"""
Connection handles and connection sets.

A connection is anything that can take a finished SSE frame. The core only
ever calls two methods on it:

- ``send(frame)`` delivers one frame, raising on failure.
- ``fail(exc)`` tells the transport the stream is dead and must not be
  written to again.

``QueueConnection`` is a small in-process implementation backed by a
thread-safe queue; ``djust_datastar.sse.sse_response`` streams it to a client.
"""

import collections.abc
import logging
import queue
from typing import Any, Iterable, Iterator, Optional, Protocol, Tuple, runtime_checkable

from .exceptions import ConnectionClosedError, EmptyConnectionSetError

logger = logging.getLogger(__name__)


@runtime_checkable
class Connection(Protocol):
    """Interface the dispatcher expects from a transport connection."""

    def send(self, frame: str) -> None:
        ...

    def fail(self, exc: BaseException) -> None:
        ...


class ConnectionSet:
    """
    Immutable, non-empty group of connections targeted by one event.

    Connections are compared by identity: two distinct objects that compare
    equal are still two connections. Order of first appearance is kept so
    dispatch order is predictable.
    """

    __slots__ = ("_connections",)

    def __init__(self, connections: Any):
        if connections is None:
            raise EmptyConnectionSetError()

        if isinstance(connections, ConnectionSet):
            items: Iterable = connections._connections
        elif isinstance(connections, (str, bytes)) or not _is_iterable(connections):
            items = (connections,)
        else:
            items = connections

        seen = set()
        unique = []
        for connection in items:
            if connection is None or id(connection) in seen:
                continue
            seen.add(id(connection))
            unique.append(connection)

        if not unique:
            raise EmptyConnectionSetError()

        self._connections: Tuple[Any, ...] = tuple(unique)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._connections)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection: Any) -> bool:
        return any(c is connection for c in self._connections)

    def __repr__(self) -> str:
        return f"<ConnectionSet size={len(self._connections)}>"

    def without(self, connections: Iterable[Any]) -> Optional["ConnectionSet"]:
        """
        Return a new set without the given connections.

        Typically called with ``DispatchResult.failed_connections`` to stop
        targeting dead streams. Returns None if nothing is left.
        """
        dropped = {id(c) for c in connections}
        remaining = [c for c in self._connections if id(c) not in dropped]
        if not remaining:
            return None
        return ConnectionSet(remaining)


def _is_iterable(value: Any) -> bool:
    # Generators have send() too, so iterators are always expanded.
    # Any other object with send() is a single connection, even if iterable.
    if isinstance(value, (list, tuple, set, frozenset, collections.abc.Iterator)):
        return True
    return hasattr(value, "__iter__") and not hasattr(value, "send")


class QueueConnection:
    """
    In-process connection that queues frames for a streaming response.

    ``send`` may be called from any thread; ``frames`` is consumed by the
    response generator. Once the connection is failed or closed, ``send``
    raises ``ConnectionClosedError``.
    """

    # Sentinel pushed to wake the reader on close
    _CLOSED = None

    def __init__(self, name: Optional[str] = None, maxsize: int = 0):
        self.name = name
        self.queue: "queue.Queue[Optional[str]]" = queue.Queue(maxsize=maxsize)
        self.active = True
        self.error: Optional[BaseException] = None

    def __repr__(self) -> str:
        state = "open" if self.active else "closed"
        return f"<QueueConnection {self.name or hex(id(self))} {state}>"

    def send(self, frame: str) -> None:
        """Queue a frame for delivery."""
        if not self.active:
            raise ConnectionClosedError(f"Connection {self!r} is closed")
        self.queue.put_nowait(frame)

    def fail(self, exc: BaseException) -> None:
        """Mark the connection as failed; no further frames are accepted."""
        self.error = exc
        self.close()

    def close(self) -> None:
        """Stop accepting frames and let ``frames()`` finish."""
        if not self.active:
            return
        self.active = False
        self.queue.put(self._CLOSED)
        logger.debug("Closed %r", self)

    def frames(self, timeout: Optional[float] = None) -> Iterator[str]:
        """
        Yield queued frames until the connection is closed.

        With a timeout, iteration also stops once no frame arrived within
        ``timeout`` seconds.
        """
        while True:
            try:
                frame = self.queue.get(timeout=timeout)
            except queue.Empty:
                return
            if frame is self._CLOSED:
                return
            yield frame

    def drain(self) -> list:
        """Return every frame queued so far without blocking."""
        frames = []
        while True:
            try:
                frame = self.queue.get_nowait()
            except queue.Empty:
                break
            if frame is not self._CLOSED:
                frames.append(frame)
        return frames
