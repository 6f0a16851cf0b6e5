from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from ..headers import EMPTY_HEADERS, HeaderItems, Headers
from ..sink import as_sinks, DEFAULT_BUFFER_SIZE, write_all, Writable
from ..typing import Sink, Sinks
from ..utils import checked_total, validate_bytes, validate_no_line_breaks

Extension = tuple[str, Optional[str]]


def _extensions(items: Iterable[Extension]) -> tuple[Extension, ...]:
    if isinstance(items, Mapping):
        items = items.items()
    validated = []
    for name, value in items:
        value = "" if value is None else value
        validate_no_line_breaks("chunk extension", name, value)
        validated.append((name, value))
    return tuple(validated)


@dataclass(frozen=True)
class Chunk(Writable):
    """A single chunk of a chunked body, see RFC 7230 section 4.1."""

    data: bytes = b""
    extensions: Sequence[Extension] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", validate_bytes("Chunk", self.data))
        object.__setattr__(self, "extensions", _extensions(self.extensions))

    def size(self) -> int:
        return len(self.data)

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        DEFAULT_ENCODER.write_chunk(self, sinks)


class ChunkEncoder:
    """Frames chunks with the chunked transfer-coding.

    The hexadecimal case of the chunk sizes is fixed per encoder, so
    every size line one encoder produces is consistent.
    """

    def __init__(self, uppercase: bool = False) -> None:
        self.uppercase = uppercase
        self._size_format = "X" if uppercase else "x"

    def size_line(self, chunk: Chunk) -> bytes:
        line = format(chunk.size(), self._size_format)
        for name, value in chunk.extensions:
            line += f";{name}"
            if value:
                line += f"={value}"
        return f"{line}\r\n".encode("utf-8")

    def encode_chunk(self, chunk: Chunk) -> bytes:
        if chunk.size() > 0:
            return self.size_line(chunk) + chunk.data + b"\r\n"
        return self.size_line(chunk)

    def write_chunk(self, chunk: Chunk, sinks: Sinks) -> None:
        self._write_chunk(chunk, as_sinks(sinks))

    def write(self, contents: ChunkedBodyContents, sinks: Sinks) -> None:
        targets = as_sinks(sinks)
        for chunk in contents.chunks:
            self._write_chunk(chunk, targets)
        contents.trailer_headers.write_to(targets)

    def _write_chunk(self, chunk: Chunk, sinks: list[Sink]) -> None:
        size_line = self.size_line(chunk)
        for sink in sinks:
            write_all(sink, size_line)
            if chunk.size() > 0:
                write_all(sink, chunk.data)
                write_all(sink, b"\r\n")

    def __repr__(self) -> str:
        return f"ChunkEncoder(uppercase={self.uppercase})"


DEFAULT_ENCODER = ChunkEncoder()


@dataclass(frozen=True)
class ChunkedBodyContents(Writable):
    """The chunks and trailer headers of a body with the chunked coding."""

    chunks: Sequence[Chunk] = ()
    trailer_headers: Headers = field(default=EMPTY_HEADERS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chunks", tuple(self.chunks))
        if not isinstance(self.trailer_headers, Headers):
            object.__setattr__(self, "trailer_headers", Headers(self.trailer_headers))

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        chunk_size: int = DEFAULT_BUFFER_SIZE,
        trailer_headers: Optional[HeaderItems] = None,
    ) -> ChunkedBodyContents:
        """Split *data* into chunks of at most *chunk_size* bytes.

        The final zero size chunk is always appended.
        """
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")
        chunks = [
            Chunk(data[offset : offset + chunk_size]) for offset in range(0, len(data), chunk_size)
        ]
        chunks.append(Chunk())
        return cls(chunks, Headers(trailer_headers or ()))

    def size(self) -> int:
        return checked_total(chunk.size() for chunk in self.chunks)

    def data(self) -> bytes:
        """Return the decoded body, the payloads concatenated in order."""
        result = bytearray(self.size())
        offset = 0
        for chunk in self.chunks:
            result[offset : offset + chunk.size()] = chunk.data
            offset += chunk.size()
        return bytes(result)

    def as_string(self, encoding: str = "utf-8") -> str:
        return self.data().decode(encoding)

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        DEFAULT_ENCODER.write(self, sinks)

    def __str__(self) -> str:
        return self.as_string()
