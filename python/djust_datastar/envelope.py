"""
In-progress representation of one Datastar SSE event.

An envelope collects the event name and the ordered ``data:`` lines of a
single frame. Order matters on the wire: ``mode`` and ``selector`` lines must
come before ``elements`` lines, so lines are only ever appended.
"""

import uuid
from typing import List, Optional

# Datastar event names
PATCH_ELEMENTS = "datastar-patch-elements"
PATCH_SIGNALS = "datastar-patch-signals"


class EventEnvelope:
    """
    Event id, event name and data lines of one SSE frame.

    The id is a fresh UUID generated on construction. Data lines are stored
    without the ``data: `` prefix; ``to_frame()`` adds it.
    """

    __slots__ = ("id", "name", "data_lines")

    def __init__(self, name: Optional[str] = None):
        self.id: str = str(uuid.uuid4())
        self.name: Optional[str] = name
        self.data_lines: List[str] = []

    def __repr__(self) -> str:
        return f"<EventEnvelope {self.name} id={self.id} lines={len(self.data_lines)}>"

    def set_name(self, name: str) -> "EventEnvelope":
        self.name = name
        return self

    def append_data_line(self, text: str) -> "EventEnvelope":
        """Append one data line."""
        self.data_lines.append(text)
        return self

    def append_multiline_field(self, prefix: str, raw_text: str) -> "EventEnvelope":
        """
        Append ``raw_text`` as one ``<prefix> <line>`` data line per line.

        Each line is stripped and blank lines are dropped, so indentation and
        empty lines in rendered templates never reach the wire.
        """
        for line in raw_text.splitlines():
            line = line.strip()
            if line:
                self.data_lines.append(f"{prefix} {line}")
        return self

    def to_frame(self) -> str:
        """
        Serialize the envelope as an SSE frame.

        Raises:
            ValueError: If no event name has been set.
        """
        if not self.name:
            raise ValueError("Event name must be set before the envelope is dispatched")

        lines = [f"event: {self.name}", f"id: {self.id}"]
        lines.extend(f"data: {line}" for line in self.data_lines)

        # Blank line terminates the event
        return "\n".join(lines) + "\n\n"
