"""Shared test doubles for djust-datastar tests."""


class BrokenConnection:
    """Connection whose send() always fails."""

    def __init__(self, name="broken", error=None):
        self.name = name
        self.error = error or ConnectionResetError("client went away")
        self.sent = []
        self.failed_with = None

    def __repr__(self):
        return f"<BrokenConnection {self.name}>"

    def send(self, frame):
        self.sent.append(frame)
        raise self.error

    def fail(self, exc):
        self.failed_with = exc


def parse_frame(frame):
    """Split an SSE frame into (event, id, data lines)."""
    assert frame.endswith("\n\n")
    event = event_id = None
    data = []
    for line in frame[:-2].split("\n"):
        field, _, value = line.partition(": ")
        if field == "event":
            event = value
        elif field == "id":
            event_id = value
        elif field == "data":
            data.append(value)
    return event, event_id, data
