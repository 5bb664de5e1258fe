"""
=============================================================================
HTTP MESSAGE VALUE TYPES
=============================================================================

The small building blocks shared by requests and responses: the protocol
version and the header collection.

=============================================================================
WIRE FORMS
=============================================================================

    Version:    HTTP/1.1
                ──┬─ ─┬─
                  │   │
                Name  Number

    Headers:    Content-Type: text/html\r\n
                Content-Length: 5\r\n
                Server: Quickserving\r\n

Headers are kept as an ordered list of (name, value) pairs rather than a
dict. Serialization must follow insertion order, and names are kept exactly
as written ("Content-Type" is not folded to "content-type").

=============================================================================
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


class HTTPParseError(Exception):
    """
    Raised when a request cannot be parsed.

    The server never answers a malformed request; the message only ends up
    in the warning logged for the abandoned connection.
    """


@dataclass(frozen=True)
class Version:
    """
    An HTTP protocol version such as ``HTTP/1.1``.

    Attributes:
        name: Protocol name ("HTTP").
        number: Version number ("1.1").
    """

    name: str
    number: str

    def __str__(self) -> str:
        return f"{self.name}/{self.number}"

    @classmethod
    def parse(cls, text: str) -> "Version":
        """
        Parse a version string like ``HTTP/1.1``.

        Raises:
            HTTPParseError: If there is not exactly one "/" or either side
                            of it is empty.
        """
        parts = text.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise HTTPParseError(f"malformed version: {text!r}")
        return cls(name=parts[0], number=parts[1])


HTTP_1_1 = Version("HTTP", "1.1")


class Headers:
    """
    Ordered collection of HTTP header fields.

    Keys are case-sensitive and not required to be unique; ``get`` returns
    the first match. The server itself only ever inserts singleton headers.

    Example:
        headers = Headers().insert("Content-Type", "text/html")
        headers.to_text()   # "Content-Type: text/html\\r\\n"
    """

    def __init__(self, items: Optional[List[Tuple[str, str]]] = None):
        self._items: List[Tuple[str, str]] = list(items or [])

    def insert(self, name: str, value: str) -> "Headers":
        """Append a header field. Returns self for chaining."""
        self._items.append((name, value))
        return self

    def set(self, name: str, value: str) -> "Headers":
        """
        Set a header, keeping its position if it is already present.

        The first field named ``name`` takes the new value and any later
        duplicates are dropped. A missing header is appended.
        """
        updated: List[Tuple[str, str]] = []
        replaced = False
        for key, old_value in self._items:
            if key != name:
                updated.append((key, old_value))
            elif not replaced:
                updated.append((key, value))
                replaced = True
        if not replaced:
            updated.append((name, value))
        self._items = updated
        return self

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self._items:
            if key == name:
                return value
        return default

    def get_all(self, name: str) -> List[str]:
        return [value for key, value in self._items if key == name]

    def items(self) -> List[Tuple[str, str]]:
        return list(self._items)

    def to_text(self) -> str:
        """Serialize as ``Name: value\\r\\n`` lines in insertion order."""
        return "".join(f"{name}: {value}\r\n" for name, value in self._items)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._items)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Headers({self._items!r})"
