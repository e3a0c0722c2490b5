"""Root element associations for XML-based media types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from .entry import MimeTypeEntry


def _is_empty(value: Optional[str]) -> bool:
    return value is None or value == ""


@dataclass(frozen=True)
class RootXmlAssociation:
    """Namespace URI and/or local name that identify a type by its XML root element.

    Attributes:
        mime_type: Entry that owns the association; not part of comparisons.
        namespace_uri: Namespace of the root element, or None/empty for no namespace.
        local_name: Local name of the root element, or None/empty for any name.
    """

    mime_type: Optional["MimeTypeEntry"] = field(compare=False, repr=False)
    namespace_uri: Optional[str] = None
    local_name: Optional[str] = None

    def __post_init__(self) -> None:
        if _is_empty(self.namespace_uri) and _is_empty(self.local_name):
            raise InvalidArgumentError("Both namespaceURI and localName cannot be empty")

    def matches(self, namespace_uri: Optional[str], local_name: Optional[str]) -> bool:
        """Return True when the root element ``(namespace_uri, local_name)`` matches.

        A configured field must be equal to the candidate value. A field left
        empty only matches an empty candidate.
        """
        if not _is_empty(self.namespace_uri):
            if self.namespace_uri != namespace_uri:
                return False
        elif not _is_empty(namespace_uri):
            return False

        if not _is_empty(self.local_name):
            if self.local_name != local_name:
                return False
        elif not _is_empty(local_name):
            return False

        return True

    def __str__(self) -> str:
        return f"{self.mime_type}, {self.namespace_uri}, {self.local_name}"


__all__ = ["RootXmlAssociation"]
