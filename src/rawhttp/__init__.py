from .__about__ import __version__
from .body import (
    BytesBody,
    Chunk,
    ChunkedBody,
    ChunkedBodyContents,
    ChunkEncoder,
    FileBody,
    StreamBody,
    StringBody,
)
from .config import Config
from .headers import Headers
from .message import HttpMessage, Request, Response
from .sink import write_to
from .start_line import HttpVersion, RequestLine, StatusLine
from .utils import BodyReleasedError, ChunkedBodyTooLargeError, InvalidLineError
from .writer import MessageWriter

__all__ = (
    "__version__",
    "BodyReleasedError",
    "BytesBody",
    "Chunk",
    "ChunkedBody",
    "ChunkedBodyContents",
    "ChunkedBodyTooLargeError",
    "ChunkEncoder",
    "Config",
    "FileBody",
    "Headers",
    "HttpMessage",
    "HttpVersion",
    "InvalidLineError",
    "MessageWriter",
    "Request",
    "RequestLine",
    "Response",
    "StatusLine",
    "StreamBody",
    "StringBody",
    "write_to",
)
