from __future__ import annotations

from time import time
from typing import Optional

from .body.chunked import ChunkedBodyContents
from .body.factories import ChunkedBody
from .config import Config
from .message import HttpMessage
from .sink import as_sinks, write_all
from .typing import Sink, Sinks


class CountingSink:
    """Wraps a sink, counting the bytes it has accepted."""

    def __init__(self, sink: Sink) -> None:
        self.sink = sink
        self.written = 0

    def write(self, data: bytes) -> None:
        write_all(self.sink, data)
        self.written += len(data)


class MessageWriter:
    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else Config()

    def write(self, message: HttpMessage, sinks: Sinks) -> list[int]:
        """Write *message* to the sinks using the configured buffer size.

        Returns the number of bytes each sink accepted. Failures are
        logged to the error log and re-raised.
        """
        counters = [CountingSink(sink) for sink in as_sinks(sinks)]
        start = time()
        try:
            message.write_to(counters, self.config.buffer_size)
        except Exception:
            self.config.log.exception(
                "Failed to write %s after %d bytes",
                message.start_line,
                counters[0].written if counters else 0,
            )
            raise
        written = [counter.written for counter in counters]
        self.config.log.wire(message, written, time() - start)
        return written

    def chunked_body(
        self, contents: ChunkedBodyContents, content_type: Optional[str] = None
    ) -> ChunkedBody:
        return ChunkedBody(contents, self.config.create_chunk_encoder(), content_type)
