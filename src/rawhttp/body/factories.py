from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from ..headers import Headers
from ..utils import BodyReleasedError, validate_bytes
from .chunked import ChunkedBodyContents, ChunkEncoder
from .readers import (
    BaseBodyReader,
    BytesBodyReader,
    ChunkedBodyReader,
    StreamBodyReader,
)


class MessageBody(ABC):
    """A source of message bodies, handing out readers on demand.

    The message framing headers are never changed implicitly, see
    :meth:`headers_from` to derive headers consistent with the body.
    """

    chunked = False

    def __init__(self, content_type: Optional[str] = None) -> None:
        self.content_type = content_type

    @abstractmethod
    def to_body_reader(self) -> BaseBodyReader:
        pass

    def content_length(self) -> Optional[int]:
        return None

    def headers_from(self, headers: Headers) -> Headers:
        if self.content_type is not None:
            headers = headers.with_replaced("Content-Type", self.content_type)
        length = self.content_length()
        if self.chunked:
            headers = headers.without("Content-Length").with_replaced(
                "Transfer-Encoding", "chunked"
            )
        elif length is not None:
            headers = headers.without("Transfer-Encoding").with_replaced(
                "Content-Length", str(length)
            )
        else:
            headers = headers.without("Content-Length", "Transfer-Encoding")
        return headers


class BytesBody(MessageBody):
    def __init__(self, data: bytes, content_type: Optional[str] = None) -> None:
        super().__init__(content_type)
        self.data = validate_bytes("Body", data)

    def to_body_reader(self) -> BytesBodyReader:
        return BytesBodyReader(self.data)

    def content_length(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.data.decode("utf-8", errors="replace")


class StringBody(BytesBody):
    def __init__(
        self,
        text: str,
        content_type: Optional[str] = "text/plain; charset=utf-8",
        encoding: str = "utf-8",
    ) -> None:
        super().__init__(text.encode(encoding), content_type)
        self.text = text

    def __str__(self) -> str:
        return self.text


class FileBody(MessageBody):
    """A body read from a file, which is opened anew for every reader."""

    def __init__(self, path: str | os.PathLike, content_type: Optional[str] = None) -> None:
        super().__init__(content_type)
        self.path = os.fspath(path)

    def to_body_reader(self) -> StreamBodyReader:
        return StreamBodyReader(open(self.path, "rb"))

    def content_length(self) -> int:
        return os.path.getsize(self.path)

    def __str__(self) -> str:
        return f"<file body {self.path}>"


class StreamBody(MessageBody):
    """A body from an already open stream, it can only be written once."""

    def __init__(
        self,
        stream: BinaryIO,
        content_type: Optional[str] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(content_type)
        self.length = length
        self._reader = StreamBodyReader(stream, length)

    def to_body_reader(self) -> StreamBodyReader:
        if self._reader.closed:
            raise BodyReleasedError(self._reader)
        return self._reader

    def content_length(self) -> Optional[int]:
        return self.length

    def __str__(self) -> str:
        return str(self._reader)


class ChunkedBody(MessageBody):
    chunked = True

    def __init__(
        self,
        contents: ChunkedBodyContents,
        encoder: Optional[ChunkEncoder] = None,
        content_type: Optional[str] = None,
    ) -> None:
        super().__init__(content_type)
        self.contents = contents
        self.encoder = encoder

    def to_body_reader(self) -> ChunkedBodyReader:
        return ChunkedBodyReader(self.contents, self.encoder)

    def __str__(self) -> str:
        return str(self.contents)
