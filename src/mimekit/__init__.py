"""Top-level package for mimekit."""

from importlib import metadata as _metadata

from .mime import (
    ByteSignature,
    Magic,
    MediaType,
    MimeTypeBuilder,
    MimeTypeEntry,
    Purifier,
    RootXmlAssociation,
    is_valid,
    parse,
)

__all__ = [
    "__version__",
    "ByteSignature",
    "Magic",
    "MediaType",
    "MimeTypeBuilder",
    "MimeTypeEntry",
    "Purifier",
    "RootXmlAssociation",
    "is_valid",
    "parse",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("mimekit")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
