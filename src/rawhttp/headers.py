from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Optional, Union

from .sink import DEFAULT_BUFFER_SIZE, write_bytes, Writable
from .typing import Sinks
from .utils import validate_no_line_breaks

HeaderItems = Union[Mapping[str, str], Iterable[tuple[str, str]]]


class Headers(Writable):
    """An immutable, ordered, case insensitive multi-map of headers.

    Names are matched ignoring case, but are always written as given
    and in insertion order. A name may appear more than once.
    """

    def __init__(self, items: HeaderItems = ()) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        validated: list[tuple[str, str]] = []
        for name, value in items:
            name, value = str(name), str(value)
            if name == "":
                raise ValueError("Header names cannot be empty")
            validate_no_line_breaks("header", name, value)
            validated.append((name, value))
        self._items = tuple(validated)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = name.lower()
        return any(existing.lower() == key for existing, _ in self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        key = name.lower()
        for existing, value in self._items:
            if existing.lower() == key:
                return value
        return default

    def get_all(self, name: str) -> list[str]:
        key = name.lower()
        return [value for existing, value in self._items if existing.lower() == key]

    def names(self) -> list[str]:
        """Return the distinct names, as first written."""
        seen: set[str] = set()
        names = []
        for name, _ in self._items:
            if name.lower() not in seen:
                seen.add(name.lower())
                names.append(name)
        return names

    def with_added(self, name: str, value: str) -> Headers:
        return Headers(self._items + ((name, value),))

    def with_replaced(self, name: str, value: str) -> Headers:
        """Replace every value of *name* with a single *value*.

        The replacement takes the position of the first existing entry,
        or is appended if the name is not present.
        """
        key = name.lower()
        items: list[tuple[str, str]] = []
        replaced = False
        for existing, existing_value in self._items:
            if existing.lower() == key:
                if not replaced:
                    items.append((name, value))
                    replaced = True
            else:
                items.append((existing, existing_value))
        if not replaced:
            items.append((name, value))
        return Headers(items)

    def without(self, *names: str) -> Headers:
        keys = {name.lower() for name in names}
        return Headers((name, value) for name, value in self._items if name.lower() not in keys)

    def merge(self, other: HeaderItems, append: bool = True) -> Headers:
        """Combine these headers with *other*.

        When appending every existing entry is kept and the entries of
        *other* follow them, so a clashing name ends up with both sets
        of values. Otherwise *other* takes precedence, its entries come
        first and existing entries with a clashing name are dropped.
        """
        if not isinstance(other, Headers):
            other = Headers(other)
        if append:
            return Headers(self._items + other._items)
        else:
            overridden = {name.lower() for name, _ in other._items}
            kept = tuple(item for item in self._items if item[0].lower() not in overridden)
            return Headers(other._items + kept)

    def encode(self) -> bytes:
        lines = b"".join(f"{name}: {value}\r\n".encode("utf-8") for name, value in self._items)
        return lines + b"\r\n"

    def write_to(self, sinks: Sinks, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        write_bytes(self.encode(), sinks)

    def __str__(self) -> str:
        return "".join(f"{name}: {value}\r\n" for name, value in self._items)

    def __repr__(self) -> str:
        return f"Headers({list(self._items)!r})"


EMPTY_HEADERS = Headers()
