"""Data models produced by the probe."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class XmlRoot(BaseModel):
    """Root element found at the start of an XML sample."""

    namespace: Optional[str] = None
    local_name: str


class ProbeReport(BaseModel):
    """Evidence gathered for one file, listed per catalog entry.

    The lists hold media type names in catalog order. The report does not rank
    them; callers decide which candidate to trust.

    Attributes:
        path: File that was probed.
        sample_size: Number of bytes examined after purification.
        magic_matches: Entries whose magic signatures matched the sample.
        xml_root: Root element of the sample when it parsed as XML.
        xml_matches: Entries associated with that root element.
        extension_matches: Entries that list the file's extension.
    """

    path: Path
    sample_size: int = 0
    magic_matches: List[str] = Field(default_factory=list)
    xml_root: Optional[XmlRoot] = None
    xml_matches: List[str] = Field(default_factory=list)
    extension_matches: List[str] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.magic_matches or self.xml_matches or self.extension_matches)


__all__ = ["XmlRoot", "ProbeReport"]
