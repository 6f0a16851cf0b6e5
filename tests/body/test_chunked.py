from __future__ import annotations

from io import BytesIO

import pytest
from _pytest.monkeypatch import MonkeyPatch
from hypothesis import given, strategies as st

import rawhttp.utils
from rawhttp.body.chunked import Chunk, ChunkedBodyContents, ChunkEncoder
from rawhttp.headers import Headers
from rawhttp.utils import ChunkedBodyTooLargeError, InvalidLineError
from ..helpers import FailingSink, ShortWriteSink


@pytest.mark.parametrize(
    "chunk, expected",
    [
        (Chunk(extensions={}, data=b"abc"), b"3\r\nabc\r\n"),
        (Chunk(extensions={"x": ""}, data=b""), b"0;x\r\n"),
        (Chunk(b"hello", [("name", "value"), ("flag", "")]), b"5;name=value;flag\r\nhello\r\n"),
        (Chunk(b"a", [("n", None)]), b"1;n\r\na\r\n"),
        (Chunk(b"x" * 26), b"1a\r\n" + b"x" * 26 + b"\r\n"),
        (Chunk(), b"0\r\n"),
    ],
)
def test_chunk_framing(chunk: Chunk, expected: bytes) -> None:
    assert chunk.to_bytes() == expected


def test_encoder_case_is_fixed() -> None:
    chunk = Chunk(b"x" * 255)
    assert ChunkEncoder().size_line(chunk) == b"ff\r\n"
    assert ChunkEncoder(uppercase=True).size_line(chunk) == b"FF\r\n"


def test_extension_line_breaks_rejected() -> None:
    with pytest.raises(InvalidLineError):
        Chunk(b"a", [("x", "1\r\n")])


def test_contents_write_with_trailers(sink: BytesIO) -> None:
    contents = ChunkedBodyContents(
        [Chunk(b"Hello "), Chunk(b"World", [("sig", "abc")]), Chunk()],
        Headers([("Expires", "never"), ("X-Checksum", "1")]),
    )
    contents.write_to(sink)
    assert sink.getvalue() == (
        b"6\r\nHello \r\n5;sig=abc\r\nWorld\r\n0\r\nExpires: never\r\nX-Checksum: 1\r\n\r\n"
    )


def test_contents_without_trailers_end_with_blank_line() -> None:
    assert ChunkedBodyContents([Chunk(b"ab"), Chunk()]).to_bytes() == b"2\r\nab\r\n0\r\n\r\n"


def test_zero_size_chunks_are_encoded_as_given() -> None:
    contents = ChunkedBodyContents([Chunk(), Chunk(b"a"), Chunk()])
    assert contents.to_bytes() == b"0\r\n1\r\na\r\n0\r\n\r\n"


def test_contents_fan_out_is_identical() -> None:
    contents = ChunkedBodyContents.from_bytes(b"0123456789", chunk_size=4, trailer_headers={"A": "b"})
    first, second = BytesIO(), BytesIO()
    ChunkEncoder(uppercase=True).write(contents, [first, second])
    assert first.getvalue() == second.getvalue()
    assert first.getvalue() == b"4\r\n0123\r\n4\r\n4567\r\n2\r\n89\r\n0\r\nA: b\r\n\r\n"


def test_contents_write_propagates_errors(failing_sink: FailingSink) -> None:
    with pytest.raises(BrokenPipeError):
        ChunkedBodyContents([Chunk(b"ab")]).write_to([failing_sink])


def test_from_bytes_empty() -> None:
    contents = ChunkedBodyContents.from_bytes(b"")
    assert contents.chunks == (Chunk(),)
    assert contents.size() == 0


def test_from_bytes_invalid_chunk_size() -> None:
    with pytest.raises(ValueError):
        ChunkedBodyContents.from_bytes(b"abc", chunk_size=0)


def test_as_string() -> None:
    contents = ChunkedBodyContents([Chunk("Grüß ".encode()), Chunk("Gott".encode())])
    assert contents.as_string() == "Grüß Gott"
    assert str(contents) == "Grüß Gott"


@given(st.lists(st.binary(max_size=64), max_size=20))
def test_decoded_data_is_concatenated_payloads(payloads: list) -> None:
    contents = ChunkedBodyContents([Chunk(payload) for payload in payloads])
    assert contents.data() == b"".join(payloads)
    assert contents.size() == sum(len(payload) for payload in payloads)


@given(st.lists(st.binary(max_size=32), max_size=10), st.booleans())
def test_encoding_is_deterministic(payloads: list, uppercase: bool) -> None:
    contents = ChunkedBodyContents([Chunk(payload) for payload in payloads])
    encoder = ChunkEncoder(uppercase)
    first, second = BytesIO(), BytesIO()
    encoder.write(contents, first)
    encoder.write(contents, second)
    assert first.getvalue() == second.getvalue()


def test_size_overflow_is_an_error(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(rawhttp.utils, "MAX_DECODED_SIZE", 5)
    contents = ChunkedBodyContents([Chunk(b"abc"), Chunk(b"def")])
    with pytest.raises(ChunkedBodyTooLargeError):
        contents.size()
    with pytest.raises(OverflowError):
        contents.data()
    # Writing the wire form needs no decoded buffer
    assert contents.to_bytes() == b"3\r\nabc\r\n3\r\ndef\r\n\r\n"


def test_encode_chunk_matches_write() -> None:
    encoder = ChunkEncoder(uppercase=True)
    for chunk in (Chunk(b"x" * 11, {"a": "b"}), Chunk()):
        sink = BytesIO()
        encoder.write_chunk(chunk, sink)
        assert encoder.encode_chunk(chunk) == sink.getvalue()


def test_short_writes_complete_chunk() -> None:
    sink = ShortWriteSink(limit=1)
    ChunkEncoder().write_chunk(Chunk(b"abc", {"x": "y"}), [sink])
    assert sink.data == b"3;x=y\r\nabc\r\n"


@pytest.mark.parametrize("data", [5, "abc", None])
def test_chunk_data_must_be_bytes(data: object) -> None:
    with pytest.raises(TypeError):
        Chunk(data)  # type: ignore
