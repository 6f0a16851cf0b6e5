from .chunked import Chunk, ChunkedBodyContents, ChunkEncoder
from .factories import BytesBody, ChunkedBody, FileBody, MessageBody, StreamBody, StringBody
from .readers import BaseBodyReader, BytesBodyReader, ChunkedBodyReader, StreamBodyReader

__all__ = (
    "BaseBodyReader",
    "BytesBody",
    "BytesBodyReader",
    "Chunk",
    "ChunkedBody",
    "ChunkedBodyContents",
    "ChunkedBodyReader",
    "ChunkEncoder",
    "FileBody",
    "MessageBody",
    "StreamBody",
    "StreamBodyReader",
    "StringBody",
)
