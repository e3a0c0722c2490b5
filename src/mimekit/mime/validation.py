"""Syntax checks for media type names."""

from __future__ import annotations

from typing import Optional

from .errors import InvalidArgumentError

# RFC 2045 tspecials, minus the "/" separator which is handled on its own.
_TSPECIALS = frozenset('()<>@,;:\\"[]?=')


def is_valid(name: Optional[str]) -> bool:
    """Return whether ``name`` is a syntactically valid media type name.

    The check follows a simplified form of RFC 2045 section 5.1::

        name      := token "/" token
        token     := 1*<any US-ASCII CHAR except SPACE, CTLs, or tspecials>

    Args:
        name: Candidate name such as ``text/plain``.

    Returns:
        bool: True when the name is a single ``token/token`` pair.

    Raises:
        InvalidArgumentError: If ``name`` is None.
    """
    if name is None:
        raise InvalidArgumentError("Name is missing")

    slash = False
    last = len(name) - 1
    for index, char in enumerate(name):
        code = ord(char)
        if code <= 0x20 or code >= 127 or char in _TSPECIALS:
            return False
        if char == "/":
            if slash or index == 0 or index == last:
                return False
            slash = True
    return slash


__all__ = ["is_valid"]
