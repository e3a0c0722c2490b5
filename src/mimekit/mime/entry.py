"""Registered media type entries and the ``type/subtype[;params]`` parser.

A :class:`MimeTypeEntry` aggregates everything known about one media type: its
normalized name, quality weighting, file extensions, descriptive metadata, and
the evidence used to recognize content of that type (magic signatures and XML
root associations).

Entries are mutated only through :class:`mimekit.mime.builder.MimeTypeBuilder`
while a catalog is being assembled; readers receive tuples and never see a
mutator.
"""

from __future__ import annotations

import logging
from functools import total_ordering
from typing import Any, List, Optional, Tuple

from .errors import InvalidArgumentError, MalformedTypeError
from .magic import Magic
from .media_type import WILDCARD, MediaType
from .validation import is_valid
from .xml import RootXmlAssociation

LOGGER = logging.getLogger(__name__)

_PARSE_MESSAGE = "Cannot parse MIME type (expected type/subtype[;q=x.y] format): "
_DEFAULT_QUALITY = 1.0
_UNPARSED_QUALITY = 0.0
_UNSET: Any = object()


def _parse_quality(params: str, mime_type: str) -> float:
    """Return the last usable ``q`` value found in a ``;``-separated parameter block."""
    quality = _DEFAULT_QUALITY
    for param in params.split(";"):
        key, sep, value = param.partition("=")
        if not sep or key.strip().lower() != "q":
            continue
        try:
            candidate = float(value)
        except ValueError:
            LOGGER.debug("Ignoring unparsable quality %r in %r", value, mime_type)
            continue
        # NaN fails both comparisons and falls back to the default as well.
        quality = candidate if 0.0 < candidate < 1.0 else _DEFAULT_QUALITY
    return quality


@total_ordering
class MimeTypeEntry:
    """Internet media type known to a detection catalog.

    Equality, hashing, and ordering consider the media type only. Two entries
    that differ solely in subtype wildcard or quality collapse to one key in a
    set or dictionary.
    """

    def __init__(
        self,
        media_type: MediaType,
        subtype: Optional[str] = _UNSET,
        quality: float = _UNPARSED_QUALITY,
    ) -> None:
        """Create an entry for ``media_type``.

        Args:
            media_type: Normalized media type name.
            subtype: Normalized subtype, or None for any subtype. Defaults to the
                subtype of ``media_type``.
            quality: Quality weighting of this entry. Stays ``0.0`` until a parsed
                ``q`` value is supplied.

        Raises:
            InvalidArgumentError: If ``media_type`` is None, or ``subtype`` is
                neither None nor the subtype of ``media_type``.
        """
        if media_type is None:
            raise InvalidArgumentError("Media type name is missing")
        if subtype is _UNSET or (subtype == WILDCARD and media_type.is_wildcard_subtype):
            subtype = None if media_type.is_wildcard_subtype else media_type.subtype
        elif subtype is not None and subtype != media_type.subtype:
            raise InvalidArgumentError(f"Subtype {subtype!r} does not belong to {media_type}")
        self._setup(media_type, subtype, quality)

    @classmethod
    def any_type(cls, quality: float = _UNPARSED_QUALITY) -> "MimeTypeEntry":
        """Return the universal ``*/*`` entry."""
        entry = cls.__new__(cls)
        entry._setup(None, None, quality)
        return entry

    def _setup(
        self,
        media_type: Optional[MediaType],
        subtype: Optional[str],
        quality: float,
    ) -> None:
        self._media_type = media_type
        self._subtype = subtype
        self._quality = quality
        self._acronym = ""
        self._uti = ""
        self._description = ""
        self._links: Tuple[str, ...] = ()
        self._extensions: List[str] = []
        self._magics: List[Magic] = []
        self._root_xml: List[RootXmlAssociation] = []
        self._min_length = 0
        self._frozen = False

    # ------------------------------------------------------------------ #
    # Parsing                                                            #
    # ------------------------------------------------------------------ #

    @classmethod
    def parse(cls, mime_type: Optional[str]) -> Optional["MimeTypeEntry"]:
        """Parse ``type/subtype[;params]`` into an entry.

        Only the ``q`` parameter is interpreted; the last parsable value wins and
        anything outside ``(0.0, 1.0)`` falls back to ``1.0``. Other parameters
        are ignored.

        Args:
            mime_type: Text such as ``application/rdf+xml;q=0.9``.

        Returns:
            Optional[MimeTypeEntry]: Parsed entry, or None when ``mime_type`` is None.

        Parsed entries are frozen, so readers cannot populate them through a
        :class:`~mimekit.mime.builder.MimeTypeBuilder`.

        Raises:
            MalformedTypeError: If the text has no ``/``, an empty half, a
                character outside the token set, or a wildcard major type with
                a concrete subtype.
        """
        if mime_type is None:
            return None

        name, sep, params = mime_type.partition(";")
        quality = _parse_quality(params, mime_type) if sep else _DEFAULT_QUALITY

        major, slash, minor = name.partition("/")
        if not slash:
            raise MalformedTypeError(_PARSE_MESSAGE + mime_type)
        major = major.strip().lower()
        minor = minor.strip().lower()
        if not major or not minor or not is_valid(f"{major}/{minor}"):
            raise MalformedTypeError(_PARSE_MESSAGE + mime_type)

        if major == WILDCARD:
            if minor != WILDCARD:
                raise MalformedTypeError(_PARSE_MESSAGE + mime_type)
            entry = cls.any_type(quality)
        elif minor == WILDCARD:
            entry = cls(MediaType(major, WILDCARD), None, quality)
        else:
            entry = cls(MediaType(major, minor), minor, quality)
        entry._frozen = True
        return entry

    # ------------------------------------------------------------------ #
    # Names                                                              #
    # ------------------------------------------------------------------ #

    @property
    def media_type(self) -> Optional[MediaType]:
        """Return the normalized media type, or None for ``*/*``."""
        return self._media_type

    @property
    def name(self) -> str:
        """Return the lower-case media type name."""
        if self._media_type is None:
            return f"{WILDCARD}/{WILDCARD}"
        return str(self._media_type)

    @property
    def major_type(self) -> str:
        return WILDCARD if self._media_type is None else self._media_type.type

    @property
    def subtype(self) -> str:
        return WILDCARD if self._subtype is None else self._subtype

    @property
    def full_type(self) -> str:
        return f"{self.major_type}/{self.subtype}"

    @property
    def quality(self) -> float:
        return self._quality

    @property
    def is_any_major_type(self) -> bool:
        return self._media_type is None

    @property
    def is_any_subtype(self) -> bool:
        return self._subtype is None

    # ------------------------------------------------------------------ #
    # Metadata                                                           #
    # ------------------------------------------------------------------ #

    @property
    def acronym(self) -> str:
        return self._acronym

    @property
    def uniform_type_identifier(self) -> str:
        """Return the Uniform Type Identifier, such as ``public.plain-text``."""
        return self._uti

    @property
    def description(self) -> str:
        return self._description

    @property
    def links(self) -> Tuple[str, ...]:
        """Return documentation links in the order they were added."""
        return self._links

    @property
    def extension(self) -> str:
        """Return the preferred file extension, or an empty string if none is known."""
        return self._extensions[0] if self._extensions else ""

    @property
    def extensions(self) -> Tuple[str, ...]:
        """Return every known file extension, preferred first."""
        return tuple(self._extensions)

    # ------------------------------------------------------------------ #
    # Evidence                                                           #
    # ------------------------------------------------------------------ #

    @property
    def magics(self) -> Tuple[Magic, ...]:
        return tuple(self._magics)

    @property
    def has_magic(self) -> bool:
        return bool(self._magics)

    @property
    def min_length(self) -> int:
        """Return the number of leading bytes the magics need to be evaluated."""
        return self._min_length

    @property
    def root_xml(self) -> Tuple[RootXmlAssociation, ...]:
        return tuple(self._root_xml)

    @property
    def has_root_xml(self) -> bool:
        return bool(self._root_xml)

    def matches_magic(self, data: bytes) -> bool:
        """Return True if any magic of this entry recognizes ``data``."""
        return any(magic.matches(data) for magic in self._magics)

    def matches(self, data: bytes) -> bool:
        """Return True if ``data`` looks like content of this type."""
        return self.matches_magic(data)

    def matches_xml(self, namespace_uri: Optional[str], local_name: Optional[str]) -> bool:
        """Return True if an XML root element with this name identifies this type."""
        return any(xml.matches(namespace_uri, local_name) for xml in self._root_xml)

    # ------------------------------------------------------------------ #
    # Mutation, reserved for MimeTypeBuilder                             #
    # ------------------------------------------------------------------ #

    def _set_acronym(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("Acronym is missing")
        self._acronym = value

    def _set_uniform_type_identifier(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("Uniform Type Identifier is missing")
        self._uti = value

    def _set_description(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("Description is missing")
        self._description = value

    def _add_link(self, link: str) -> None:
        if link is None:
            raise InvalidArgumentError("Missing Link")
        self._links = (*self._links, str(link))

    def _add_extension(self, extension: str) -> None:
        if extension is None:
            raise InvalidArgumentError("Extension is missing")
        if extension not in self._extensions:
            self._extensions.append(extension)

    def _add_magic(self, magic: Optional[Magic]) -> None:
        if magic is None:
            return
        self._magics.append(magic)

    def _add_root_xml(self, namespace_uri: Optional[str], local_name: Optional[str]) -> None:
        self._root_xml.append(RootXmlAssociation(self, namespace_uri, local_name))

    def _set_min_length(self, value: int) -> None:
        if value < 0:
            raise InvalidArgumentError("Minimum length must not be negative")
        self._min_length = value

    # ------------------------------------------------------------------ #
    # Identity                                                           #
    # ------------------------------------------------------------------ #

    def _sort_key(self) -> Tuple[Any, ...]:
        if self._media_type is None:
            return (0,)
        return (1, self._media_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MimeTypeEntry):
            return NotImplemented
        return self._media_type == other._media_type

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MimeTypeEntry):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._media_type)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"MimeTypeEntry({self.full_type!r}, quality={self._quality!r})"


def parse(mime_type: Optional[str]) -> Optional[MimeTypeEntry]:
    """Module-level shortcut for :meth:`MimeTypeEntry.parse`."""
    return MimeTypeEntry.parse(mime_type)


__all__ = ["MimeTypeEntry", "parse"]
