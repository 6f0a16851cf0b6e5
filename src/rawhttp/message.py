from __future__ import annotations

from abc import abstractmethod
from typing import Any, Optional, TypeVar

from .headers import EMPTY_HEADERS, HeaderItems, Headers
from .sink import as_sinks, DEFAULT_BUFFER_SIZE, Writable
from .start_line import RequestLine, StartLine, StatusLine, Version
from .typing import BodyReader, HttpMessageBody, Sinks
from .utils import validate_buffer_size

MessageType = TypeVar("MessageType", bound="HttpMessage")


class HttpMessage(Writable):
    """A HTTP/1.x message, a start-line, headers and an optional body.

    See RFC 7230 section 3. Messages are immutable, the ``with_``
    methods return new messages and leave this one untouched.
    """

    start_line_class: type[StartLine] = StartLine

    def __init__(
        self,
        start_line: StartLine,
        headers: HeaderItems = EMPTY_HEADERS,
        body: Optional[HttpMessageBody] = None,
    ) -> None:
        if not isinstance(start_line, self.start_line_class):
            raise TypeError(
                f"{type(self).__name__} requires a {self.start_line_class.__name__}, "
                f"got {type(start_line).__name__}"
            )
        self._start_line = start_line
        self._headers = headers if isinstance(headers, Headers) else Headers(headers)
        self._body = body

    @property
    def start_line(self) -> StartLine:
        return self._start_line

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def body(self) -> Optional[HttpMessageBody]:
        return self._body

    @property
    def has_body(self) -> bool:
        return self._body is not None

    def body_reader(self) -> Optional[BodyReader]:
        if self._body is None:
            return None
        return self._body.to_body_reader()

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        """Write the exact wire bytes of this message to every sink.

        The start-line, headers and body are written in that order, each
        to all the sinks before the next part. The body reader is
        acquired for this call only and released whether the write
        succeeds or not. Sink errors are not caught.

        Arguments:
            sinks: A sink, or a sequence of sinks.
            buffer_size: The size of the slices streamed bodies are
                read in.
        """
        validate_buffer_size(buffer_size)
        targets = as_sinks(sinks)
        reader = self.body_reader()
        try:
            self._start_line.write_to(targets)
            self._headers.write_to(targets)
            if reader is not None:
                reader.write_to(targets, buffer_size)
        finally:
            if reader is not None:
                reader.close()

    def with_headers(self: MessageType, headers: HeaderItems, append: bool = True) -> MessageType:
        """Return a copy with *headers* merged into the existing headers.

        Arguments:
            headers: The headers to add.
            append: If True the existing headers are all kept and the
                new ones follow them, otherwise the new headers come
                first and replace any existing header of the same name.
        """
        return self._copy(headers=self._headers.merge(headers, append))

    def with_body(
        self: MessageType, body: Optional[HttpMessageBody], adjust_headers: bool = False
    ) -> MessageType:
        """Return a copy with *body* in place of the existing body.

        The existing body is not written nor released, it stays with
        this message. The headers are kept as they are, it is up to the
        caller to keep them consistent with the new body unless
        *adjust_headers* is set.
        """
        headers = self._headers
        if adjust_headers:
            if body is not None:
                headers = body.headers_from(headers)
            else:
                headers = headers.without("Content-Length", "Transfer-Encoding")
        return self._copy(headers=headers, body=body)

    def _copy(self: MessageType, **changes: Any) -> MessageType:
        values = {"start_line": self._start_line, "headers": self._headers, "body": self._body}
        values.update(changes)
        return type(self)(**values)

    @property
    def http_version(self) -> Version:
        return self._start_line.http_version

    @abstractmethod
    def __repr__(self) -> str:
        pass

    def __str__(self) -> str:
        # Debugging aid only, this is not the wire format
        text = f"{self._start_line}\r\n{self._headers}\r\n"
        if self._body is not None:
            text += str(self._body)
        return text


class Request(HttpMessage):
    start_line_class = RequestLine

    @property
    def start_line(self) -> RequestLine:
        return self._start_line  # type: ignore

    @property
    def method(self) -> str:
        return self.start_line.method

    @property
    def target(self) -> str:
        return self.start_line.target

    def with_request_line(self, request_line: RequestLine) -> Request:
        return self._copy(start_line=request_line)

    def __repr__(self) -> str:
        return f"Request({self.start_line!r}, {self._headers!r}, body={self._body!r})"


class Response(HttpMessage):
    start_line_class = StatusLine

    @property
    def start_line(self) -> StatusLine:
        return self._start_line  # type: ignore

    @property
    def status_code(self) -> int:
        return self.start_line.status_code

    @property
    def reason(self) -> str:
        return self.start_line.reason

    def with_status_line(self, status_line: StatusLine) -> Response:
        return self._copy(start_line=status_line)

    def __repr__(self) -> str:
        return f"Response({self.start_line!r}, {self._headers!r}, body={self._body!r})"
