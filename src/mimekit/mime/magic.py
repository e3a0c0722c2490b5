"""Byte-pattern predicates used to recognize content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from .errors import InvalidArgumentError


@runtime_checkable
class Magic(Protocol):
    """Predicate evaluated against the leading bytes of a document.

    Implementations are responsible for their own buffer-length checks and must
    return False rather than raise when ``data`` is too short.
    """

    def matches(self, data: bytes) -> bool:
        """Return True when ``data`` carries this signature."""
        ...


@dataclass(frozen=True)
class ByteSignature:
    """Literal byte pattern anchored at an offset, or found within an offset window.

    Attributes:
        pattern: Bytes that must be present.
        offset: First offset at which the pattern may start.
        offset_end: Last offset at which the pattern may start; defaults to ``offset``.
    """

    pattern: bytes
    offset: int = 0
    offset_end: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.pattern:
            raise InvalidArgumentError("Signature pattern is empty")
        if self.offset < 0:
            raise InvalidArgumentError("Signature offset must not be negative")
        if self.offset_end is not None and self.offset_end < self.offset:
            raise InvalidArgumentError("Signature offset window is inverted")

    @property
    def last_offset(self) -> int:
        """Return the last offset at which the pattern may start."""
        return self.offset if self.offset_end is None else self.offset_end

    @property
    def reach(self) -> int:
        """Return the number of bytes needed to evaluate every candidate offset."""
        return self.last_offset + len(self.pattern)

    def matches(self, data: bytes) -> bool:
        if len(data) < self.offset + len(self.pattern):
            return False
        window = data[self.offset : self.last_offset + len(self.pattern)]
        return self.pattern in window


__all__ = ["Magic", "ByteSignature"]
