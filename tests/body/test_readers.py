from __future__ import annotations

from io import BytesIO
from unittest.mock import Mock

import pytest

from rawhttp.body.chunked import Chunk, ChunkedBodyContents, ChunkEncoder
from rawhttp.body.readers import BytesBodyReader, ChunkedBodyReader, StreamBodyReader
from rawhttp.utils import BodyReleasedError
from ..helpers import FailAfterSink


@pytest.mark.parametrize("buffer_size", [1, 3, 4096])
def test_bytes_reader_slices(buffer_size: int) -> None:
    sink = Mock()
    BytesBodyReader(b"abcdefg").write_to(sink, buffer_size)
    written = b"".join(call.args[0] for call in sink.write.call_args_list)
    assert written == b"abcdefg"
    assert all(len(call.args[0]) <= buffer_size for call in sink.write.call_args_list)


def test_reader_is_one_shot(sink: BytesIO) -> None:
    reader = BytesBodyReader(b"abc")
    reader.write_to(sink)
    with pytest.raises(BodyReleasedError):
        reader.write_to(sink)


def test_write_after_close() -> None:
    reader = BytesBodyReader(b"abc")
    reader.close()
    assert reader.closed
    with pytest.raises(BodyReleasedError):
        reader.write_to(BytesIO())


def test_close_is_idempotent() -> None:
    stream = Mock()
    reader = StreamBodyReader(stream)
    with reader:
        pass
    reader.close()
    stream.close.assert_called_once_with()


def test_stream_reader_reads_once_for_all_sinks() -> None:
    stream = BytesIO(b"0123456789")
    first, second = BytesIO(), BytesIO()
    with StreamBodyReader(stream) as reader:
        reader.write_to([first, second], 4)
    assert first.getvalue() == second.getvalue() == b"0123456789"
    assert stream.closed


def test_stream_reader_length_limit(sink: BytesIO) -> None:
    stream = BytesIO(b"0123456789")
    StreamBodyReader(stream, length=6).write_to(sink, 4)
    assert sink.getvalue() == b"012345"
    assert stream.read() == b"6789"


def test_stream_reader_error_propagates() -> None:
    failing = FailAfterSink(limit=1)
    stream = BytesIO(b"0123456789")
    with pytest.raises(ConnectionResetError):
        with StreamBodyReader(stream) as reader:
            reader.write_to([failing], 4)
    assert failing.data == b"0123"
    assert stream.closed


def test_chunked_reader_uses_encoder(sink: BytesIO) -> None:
    contents = ChunkedBodyContents([Chunk(b"x" * 171), Chunk()])
    ChunkedBodyReader(contents, ChunkEncoder(uppercase=True)).write_to(sink)
    assert sink.getvalue().startswith(b"AB\r\n")
    assert sink.getvalue().endswith(b"\r\n0\r\n\r\n")


def test_debug_text() -> None:
    assert str(BytesBodyReader(b"hi")) == "hi"
    assert str(StreamBodyReader(BytesIO(), length=3)) == "<streamed body, length 3>"
    assert str(ChunkedBodyReader(ChunkedBodyContents([Chunk(b"ok")]))) == "ok"


@pytest.mark.parametrize("buffer_size", [0, -1])
def test_reader_rejects_buffer_size(buffer_size: int, sink: BytesIO) -> None:
    reader = BytesBodyReader(b"abc")
    with pytest.raises(ValueError):
        reader.write_to(sink, buffer_size)
    assert sink.getvalue() == b""
    reader.write_to(sink)
    assert sink.getvalue() == b"abc"
