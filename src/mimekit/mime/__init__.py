"""Media type entries, parsing, and matching."""

from .builder import MimeTypeBuilder
from .entry import MimeTypeEntry, parse
from .errors import FrozenEntryError, InvalidArgumentError, MalformedTypeError, MimeTypeError
from .magic import ByteSignature, Magic
from .media_type import WILDCARD, MediaType
from .purifier import Purifier
from .validation import is_valid
from .xml import RootXmlAssociation

__all__ = [
    "ByteSignature",
    "FrozenEntryError",
    "InvalidArgumentError",
    "Magic",
    "MalformedTypeError",
    "MediaType",
    "MimeTypeBuilder",
    "MimeTypeEntry",
    "MimeTypeError",
    "Purifier",
    "RootXmlAssociation",
    "WILDCARD",
    "is_valid",
    "parse",
]
