from __future__ import annotations

import logging
from typing import List, Tuple

import h11

HOST_HEADERS = [("Host", "rawhttp.test")]


def parse_request(data: bytes) -> Tuple[h11.Request, bytes, List[Tuple[bytes, bytes]]]:
    connection = h11.Connection(h11.SERVER)
    connection.receive_data(data)
    return _read_message(connection)  # type: ignore


def parse_response(data: bytes) -> Tuple[h11.Response, bytes, List[Tuple[bytes, bytes]]]:
    connection = h11.Connection(h11.CLIENT)
    connection.send(h11.Request(method="GET", target="/", headers=HOST_HEADERS))
    connection.send(h11.EndOfMessage())
    connection.receive_data(data)
    return _read_message(connection)  # type: ignore


def _read_message(connection: h11.Connection) -> tuple:
    head = connection.next_event()
    body = b""
    while True:
        event = connection.next_event()
        if isinstance(event, h11.Data):
            body += event.data
        elif isinstance(event, h11.EndOfMessage):
            return head, body, list(event.headers)
        else:
            raise AssertionError(f"Unexpected event {event!r}")


class FailingSink:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error if error is not None else BrokenPipeError("sink closed")
        self.calls = 0

    def write(self, data: bytes) -> None:
        self.calls += 1
        raise self.error


class FailAfterSink:
    """Accepts *limit* writes then raises, recording what it accepted."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.data = b""
        self.calls = 0

    def write(self, data: bytes) -> None:
        self.calls += 1
        if self.calls > self.limit:
            raise ConnectionResetError("connection reset")
        self.data += data


class ShortWriteSink:
    """A raw style sink accepting at most *limit* bytes per write."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.data = b""
        self.calls = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        accepted = bytes(data[: self.limit])
        self.data += accepted
        return len(accepted)


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)
