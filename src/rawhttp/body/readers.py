from __future__ import annotations

from abc import abstractmethod
from types import TracebackType
from typing import BinaryIO, Optional

from ..sink import as_sinks, DEFAULT_BUFFER_SIZE, write_bytes, Writable
from ..typing import Sink, Sinks
from ..utils import BodyReleasedError, validate_buffer_size
from .chunked import ChunkedBodyContents, ChunkEncoder, DEFAULT_ENCODER


class BaseBodyReader(Writable):
    """A one-shot source of body bytes.

    A reader is drained by a single :meth:`write_to` call and must be
    closed afterwards, ideally by using it as a context manager. Any
    further write raises :class:`BodyReleasedError`.
    """

    def __init__(self) -> None:
        self._consumed = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        validate_buffer_size(buffer_size)
        if self._closed or self._consumed:
            raise BodyReleasedError(self)
        self._consumed = True
        self._write(as_sinks(sinks), buffer_size)

    @abstractmethod
    def _write(self, sinks: list[Sink], buffer_size: int) -> None:
        pass

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._release()

    def _release(self) -> None:
        pass

    def __enter__(self) -> BaseBodyReader:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


class BytesBodyReader(BaseBodyReader):
    def __init__(self, data: bytes) -> None:
        super().__init__()
        self.data = data

    def _write(self, sinks: list[Sink], buffer_size: int) -> None:
        view = memoryview(self.data)
        for offset in range(0, len(view), buffer_size):
            write_bytes(bytes(view[offset : offset + buffer_size]), sinks)

    def __str__(self) -> str:
        return self.data.decode("utf-8", errors="replace")


class StreamBodyReader(BaseBodyReader):
    """Reads a binary stream once, closing it on release.

    Each slice read from the stream is written to every sink before the
    next read, so the stream is only traversed once whatever the number
    of sinks. If a *length* is given at most that many bytes are read.
    """

    def __init__(self, stream: BinaryIO, length: Optional[int] = None) -> None:
        super().__init__()
        self.stream = stream
        self.length = length

    def _write(self, sinks: list[Sink], buffer_size: int) -> None:
        remaining = self.length
        while remaining is None or remaining > 0:
            size = buffer_size if remaining is None else min(buffer_size, remaining)
            data = self.stream.read(size)
            if not data:
                break
            write_bytes(data, sinks)
            if remaining is not None:
                remaining -= len(data)

    def _release(self) -> None:
        self.stream.close()

    def __str__(self) -> str:
        length = "unknown" if self.length is None else self.length
        return f"<streamed body, length {length}>"


class ChunkedBodyReader(BaseBodyReader):
    def __init__(
        self, contents: ChunkedBodyContents, encoder: Optional[ChunkEncoder] = None
    ) -> None:
        super().__init__()
        self.contents = contents
        self.encoder = encoder if encoder is not None else DEFAULT_ENCODER

    def _write(self, sinks: list[Sink], buffer_size: int) -> None:
        self.encoder.write(self.contents, sinks)

    def __str__(self) -> str:
        return str(self.contents)
