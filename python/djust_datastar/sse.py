"""
Streaming a connection to a browser.

``sse_response`` turns a ``QueueConnection`` into a Django streaming
response. Whatever is emitted to the connection afterwards is written to the
client as it arrives::

    from djust_datastar import QueueConnection, sse_response

    def updates(request):
        connection = QueueConnection(name=request.session.session_key)
        registry.add(connection)
        return sse_response(connection)

Accepting, tracking and closing connections is left to the application.
"""

import logging
from typing import Iterator, Optional

from django.http import StreamingHttpResponse

from .connections import QueueConnection

logger = logging.getLogger(__name__)


def sse_comment(comment: str) -> str:
    """
    Format a comment message.

    Args:
        comment: Comment text

    Returns:
        Formatted SSE comment string
    """
    lines = [f": {line}" for line in comment.split("\n")]
    return "\n".join(lines) + "\n\n"


def _stream_frames(connection: QueueConnection, timeout: Optional[float]) -> Iterator[bytes]:
    try:
        for frame in connection.frames(timeout=timeout):
            yield frame.encode("utf-8")
    except GeneratorExit:
        logger.debug("[SSE] Client went away from %r", connection)
        raise
    finally:
        connection.close()


def sse_response(
    connection: QueueConnection,
    timeout: Optional[float] = None,
    retry_ms: Optional[int] = None,
) -> StreamingHttpResponse:
    """
    Create an SSE StreamingHttpResponse fed by ``connection``.

    Args:
        connection: Connection whose frames are streamed
        timeout: Stop streaming after this many idle seconds (None = never)
        retry_ms: Reconnection delay sent to the client before any frame

    Returns:
        StreamingHttpResponse configured for SSE
    """

    def stream() -> Iterator[bytes]:
        if retry_ms is not None:
            yield f"retry: {int(retry_ms)}\n\n".encode("utf-8")
        yield from _stream_frames(connection, timeout)

    response = StreamingHttpResponse(stream(), content_type="text/event-stream")

    # SSE-specific headers
    response["Cache-Control"] = "no-cache"
    response["X-Accel-Buffering"] = "no"  # Disable nginx buffering
    return response
