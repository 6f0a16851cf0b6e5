from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .sink import DEFAULT_BUFFER_SIZE, write_bytes, Writable
from .typing import Sinks
from .utils import validate_no_line_breaks


class HttpVersion(Enum):
    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"

    def __str__(self) -> str:
        return self.value


Version = Union[HttpVersion, str]


def _version_text(version: Version) -> str:
    return version.value if isinstance(version, HttpVersion) else version


class StartLine(Writable):
    """The first line of a HTTP message, see RFC 7230 section 3.1."""

    http_version: Version

    @abstractmethod
    def __str__(self) -> str:
        pass

    def render(self) -> str:
        """Return the line as sent, terminated by CRLF."""
        return f"{self}\r\n"

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        write_bytes(self.render().encode("utf-8"), sinks)


@dataclass(frozen=True)
class RequestLine(StartLine):
    method: str
    target: str
    http_version: Version = HttpVersion.HTTP_1_1

    def __post_init__(self) -> None:
        validate_no_line_breaks("request-line", self.method, self.target, str(self.http_version))

    def __str__(self) -> str:
        return f"{self.method} {self.target} {_version_text(self.http_version)}"

    def with_method(self, method: str) -> RequestLine:
        return replace(self, method=method)

    def with_target(self, target: str) -> RequestLine:
        return replace(self, target=target)


@dataclass(frozen=True)
class StatusLine(StartLine):
    http_version: Version
    status_code: int
    reason: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.status_code, bool) or not isinstance(self.status_code, int):
            raise ValueError(f"Status code must be an integer, got {self.status_code!r}")
        if self.status_code < 0:
            raise ValueError(f"Status code cannot be negative, got {self.status_code}")
        validate_no_line_breaks("status-line", str(self.http_version), self.reason)

    def __str__(self) -> str:
        line = f"{_version_text(self.http_version)} {self.status_code}"
        if self.reason:
            line += f" {self.reason}"
        return line

    def with_reason(self, reason: str) -> StatusLine:
        return replace(self, reason=reason)
