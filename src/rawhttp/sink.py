from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
from typing import Union

from .typing import Sink, Sinks
from .utils import validate_buffer_size

DEFAULT_BUFFER_SIZE = 4096


def as_sinks(sinks: Sinks) -> list[Sink]:
    """Normalise a single sink or a sequence of sinks to a list."""
    if hasattr(sinks, "write"):
        return [sinks]  # type: ignore
    return list(sinks)  # type: ignore


def write_all(sink: Sink, data: bytes) -> None:
    """Write all of *data* to *sink*, resuming after short writes.

    Raw (unbuffered) streams may accept fewer bytes than given and
    return the count, any other return value means all were accepted.
    """
    written = sink.write(data)
    while isinstance(written, int) and not isinstance(written, bool) and written < len(data):
        if written <= 0:
            raise BlockingIOError(f"Sink accepted no bytes, {len(data)} remaining")
        data = data[written:]
        written = sink.write(data)


def write_bytes(data: bytes, sinks: Sinks) -> None:
    # Fail fast, a sink error leaves the later sinks untouched
    for sink in as_sinks(sinks):
        write_all(sink, data)


def write_to(
    entity: Union[Writable, bytes], sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> None:
    """Write the byte representation of *entity* to every sink in order.

    A single sink is treated as a fan-out of one, so there is exactly
    one code path regardless of how many sinks are given. Nothing is
    flushed or closed.

    Arguments:
        entity: Either raw bytes or a :class:`Writable`.
        sinks: A sink, or a sequence of sinks (possibly empty).
        buffer_size: The size of the slices used when the entity
            streams its content.
    """
    validate_buffer_size(buffer_size)
    if isinstance(entity, (bytes, bytearray, memoryview)):
        write_bytes(bytes(entity), sinks)
    else:
        entity.write_to(as_sinks(sinks), buffer_size)


class Writable(ABC):
    @abstractmethod
    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        pass

    def to_bytes(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
        buffer = BytesIO()
        self.write_to(buffer, buffer_size)
        return buffer.getvalue()
