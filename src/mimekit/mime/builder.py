"""Mutation capability for media type entries under construction."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .entry import MimeTypeEntry
from .errors import FrozenEntryError, InvalidArgumentError
from .magic import Magic
from .media_type import MediaType

LOGGER = logging.getLogger(__name__)


class MimeTypeBuilder:
    """Populate a :class:`MimeTypeEntry` and then hand it out read-only.

    Every mutator returns the builder so calls can be chained. Once
    :meth:`build` has been called the builder refuses further changes, which
    keeps published entries immutable for their readers.
    """

    def __init__(self, target: Union[MimeTypeEntry, MediaType, str]) -> None:
        """Start building an entry.

        Args:
            target: Existing entry to populate, a media type, or a media type name.

        Raises:
            InvalidArgumentError: If ``target`` is None.
            MalformedTypeError: If ``target`` is a string that is not a valid name.
            FrozenEntryError: If ``target`` is an entry that has already been built.
        """
        if target is None:
            raise InvalidArgumentError("Media type name is missing")
        if isinstance(target, str):
            target = MediaType.parse(target)
        if isinstance(target, MediaType):
            target = MimeTypeEntry(target)
        if target._frozen:
            raise FrozenEntryError(f"{target} has already been built")
        self._entry = target

    @property
    def entry(self) -> MimeTypeEntry:
        """Return the entry being built."""
        return self._entry

    @property
    def built(self) -> bool:
        return self._entry._frozen

    def _check_open(self) -> None:
        if self._entry._frozen:
            raise FrozenEntryError(f"{self._entry} has already been built")

    def set_acronym(self, acronym: str) -> "MimeTypeBuilder":
        self._check_open()
        self._entry._set_acronym(acronym)
        return self

    def set_description(self, description: str) -> "MimeTypeBuilder":
        self._check_open()
        self._entry._set_description(description)
        return self

    def set_uniform_type_identifier(self, uti: str) -> "MimeTypeBuilder":
        self._check_open()
        self._entry._set_uniform_type_identifier(uti)
        return self

    def add_link(self, link: str) -> "MimeTypeBuilder":
        self._check_open()
        self._entry._add_link(link)
        return self

    def add_extension(self, extension: str) -> "MimeTypeBuilder":
        """Register a file extension; the first one added stays preferred."""
        self._check_open()
        if extension in self._entry.extensions:
            LOGGER.debug("Extension %r already registered for %s", extension, self._entry)
        self._entry._add_extension(extension)
        return self

    def add_magic(self, magic: Optional[Magic]) -> "MimeTypeBuilder":
        """Register a magic signature; None is ignored."""
        self._check_open()
        self._entry._add_magic(magic)
        return self

    def add_root_xml(
        self, namespace_uri: Optional[str], local_name: Optional[str]
    ) -> "MimeTypeBuilder":
        """Associate an XML root element with the entry.

        Raises:
            InvalidArgumentError: If both ``namespace_uri`` and ``local_name`` are empty.
        """
        self._check_open()
        self._entry._add_root_xml(namespace_uri, local_name)
        return self

    def set_min_length(self, min_length: int) -> "MimeTypeBuilder":
        self._check_open()
        self._entry._set_min_length(min_length)
        return self

    def build(self) -> MimeTypeEntry:
        """Freeze the builder and return the populated entry."""
        self._check_open()
        self._entry._frozen = True
        return self._entry


__all__ = ["MimeTypeBuilder"]
