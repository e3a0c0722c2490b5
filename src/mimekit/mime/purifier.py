"""Stream cleaning hook run before content detection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class Purifier(ABC):
    """Clean a resettable byte stream before a detector reads it.

    Implementations rewrite the stream in place. The stream must be seekable
    so the detector can rewind it and read the cleaned content from the
    start.
    """

    @abstractmethod
    def purify(self, stream: BinaryIO) -> None:
        """Purify ``stream`` in place.

        Args:
            stream: Seekable binary stream positioned at its start.

        Raises:
            OSError: If the stream cannot be read or rewritten.
        """


__all__ = ["Purifier"]
