"""Media type errors."""


class MimeTypeError(Exception):
    """Base exception for media type operations."""


class InvalidArgumentError(MimeTypeError, ValueError):
    """Raised when a required argument is missing or unusable."""


class MalformedTypeError(MimeTypeError, ValueError):
    """Raised when a media type string does not follow ``type/subtype[;params]``."""


class FrozenEntryError(MimeTypeError):
    """Raised when a builder is used after its entry has been built."""
