"""Normalized ``type/subtype`` names."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgumentError, MalformedTypeError
from .validation import is_valid

WILDCARD = "*"


@dataclass(frozen=True, order=True)
class MediaType:
    """Immutable, lower-case media type name.

    Instances compare and sort by ``(type, subtype)`` and are hashable, so they
    can key dictionaries and ordered indexes.

    Attributes:
        type: Major type, for example ``application``.
        subtype: Subtype, for example ``rdf+xml``; ``*`` for any subtype.
    """

    type: str
    subtype: str

    @classmethod
    def parse(cls, name: str) -> "MediaType":
        """Return the media type for ``name`` after validating and normalizing it.

        Args:
            name: Media type name without parameters.

        Returns:
            MediaType: Normalized value.

        Raises:
            InvalidArgumentError: If ``name`` is None.
            MalformedTypeError: If ``name`` is not a valid ``type/subtype`` pair.
        """
        if name is None:
            raise InvalidArgumentError("Media type name is missing")
        candidate = name.strip()
        if not is_valid(candidate):
            raise MalformedTypeError(f"Invalid media type name: {name!r}")
        major, _, minor = candidate.lower().partition("/")
        return cls(major, minor)

    @property
    def is_wildcard_subtype(self) -> bool:
        """Return True when the subtype is the ``*`` placeholder."""
        return self.subtype == WILDCARD

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


__all__ = ["MediaType", "WILDCARD"]
