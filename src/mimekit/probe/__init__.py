"""Gather detection evidence for files against a set of media type entries."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Sequence

from mimekit.config.models import ProbeOptions
from mimekit.mime import MimeTypeEntry, Purifier

from .models import ProbeReport, XmlRoot

LOGGER = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def find_xml_root(data: bytes) -> Optional[XmlRoot]:
    """Return the root element of ``data`` if it starts like an XML document.

    Only the opening tag of the root element is needed, so truncated samples
    are fine as long as that tag is complete.
    """
    head = data[len(_UTF8_BOM) :] if data.startswith(_UTF8_BOM) else data
    if not head.lstrip().startswith(b"<"):
        return None

    parser = ET.XMLPullParser(events=("start",))
    try:
        parser.feed(data)
        for _, element in parser.read_events():
            tag = element.tag
            if tag.startswith("{"):
                namespace, _, local_name = tag[1:].partition("}")
                return XmlRoot(namespace=namespace, local_name=local_name)
            return XmlRoot(local_name=tag)
    except ET.ParseError as exc:
        LOGGER.debug("Sample is not well-formed XML: %s", exc)
    return None


class Prober:
    """Report which entries recognize a file, without choosing between them."""

    def __init__(
        self,
        entries: Sequence[MimeTypeEntry],
        options: ProbeOptions | None = None,
        purifiers: Sequence[Purifier] = (),
    ) -> None:
        self.entries = list(entries)
        self.options = options or ProbeOptions()
        self.purifiers = list(purifiers)

    def read_sample(self, path: Path) -> bytes:
        """Return the purified leading bytes of ``path``.

        Raises:
            OSError: If the file cannot be read or a purifier fails.
        """
        with path.open("rb") as fh:
            stream = io.BytesIO(fh.read(self.options.sample_size_bytes))
        for purifier in self.purifiers:
            LOGGER.debug("Applying %s to %s", type(purifier).__name__, path)
            stream.seek(0)
            purifier.purify(stream)
        stream.seek(0)
        return stream.read()

    def probe(self, path: Path) -> ProbeReport:
        """Sample ``path`` and collect magic, XML, and extension evidence."""
        sample = self.read_sample(path)
        return self.probe_bytes(sample, path=path)

    def probe_bytes(self, sample: bytes, *, path: Path) -> ProbeReport:
        """Collect evidence for an in-memory ``sample`` that came from ``path``."""
        report = ProbeReport(path=path, sample_size=len(sample))
        report.magic_matches = [entry.name for entry in self.entries if entry.matches(sample)]

        if self.options.sniff_xml:
            root = find_xml_root(sample)
            if root is not None:
                report.xml_root = root
                report.xml_matches = [
                    entry.name
                    for entry in self.entries
                    if entry.matches_xml(root.namespace, root.local_name)
                ]

        if self.options.check_extensions:
            filename = path.name.lower()
            report.extension_matches = [
                entry.name
                for entry in self.entries
                if any(filename.endswith(f".{extension}") for extension in entry.extensions)
            ]

        LOGGER.debug(
            "Probed %s: magic=%s xml=%s extension=%s",
            path,
            report.magic_matches,
            report.xml_matches,
            report.extension_matches,
        )
        return report


__all__ = ["Prober", "ProbeReport", "XmlRoot", "find_xml_root"]
