from __future__ import annotations

import sys
from typing import Iterable

# The largest buffer the interpreter can address, a decoded body beyond this
# size cannot be materialised.
MAX_DECODED_SIZE = sys.maxsize


class InvalidLineError(ValueError):
    def __init__(self, kind: str, value: str) -> None:
        super().__init__(f"Line breaks are not permitted in a {kind}, got {value!r}")


class BodyReleasedError(RuntimeError):
    def __init__(self, reader: object) -> None:
        super().__init__(f"Cannot write from {type(reader).__name__}, it has already been consumed or released")


class ChunkedBodyTooLargeError(OverflowError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Chunked body of {size} bytes exceeds the maximum decodable size of {limit} bytes"
        )


def has_line_break(value: str) -> bool:
    return "\r" in value or "\n" in value


def validate_no_line_breaks(kind: str, *values: str) -> None:
    for value in values:
        if has_line_break(value):
            raise InvalidLineError(kind, value)


def checked_total(sizes: Iterable[int], limit: int | None = None) -> int:
    # Accumulate without truncation, failing as soon as the limit is crossed
    if limit is None:
        limit = MAX_DECODED_SIZE
    total = 0
    for size in sizes:
        total += size
        if total > limit:
            raise ChunkedBodyTooLargeError(total, limit)
    return total


def validate_buffer_size(buffer_size: int) -> int:
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise TypeError(f"Buffer size must be an integer, got {buffer_size!r}")
    if buffer_size <= 0:
        raise ValueError(f"Buffer size must be positive, got {buffer_size}")
    return buffer_size


def validate_bytes(kind: str, data: object) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{kind} data must be bytes-like, got {type(data).__name__}")
    return bytes(data)
