from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType
from typing import Optional, Protocol, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .headers import Headers


class Sink(Protocol):
    def write(self, data: bytes) -> object:
        ...


Sinks = Union[Sink, Sequence[Sink]]


class BodyReader(Protocol):
    def write_to(self, sinks: Sinks, buffer_size: int = ...) -> None:
        ...

    def close(self) -> None:
        ...

    def __enter__(self) -> BodyReader:
        ...

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        ...


class HttpMessageBody(Protocol):
    def to_body_reader(self) -> BodyReader:
        ...

    def headers_from(self, headers: Headers) -> Headers:
        ...
