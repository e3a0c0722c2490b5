"""Load media type entries from YAML catalogs."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable, List

import yaml
from pydantic import ValidationError

from mimekit.config.models import CatalogSettings
from mimekit.mime import MimeTypeBuilder, MimeTypeEntry

from .exceptions import CatalogError
from .models import CatalogDocument, TypeDefinition

LOGGER = logging.getLogger(__name__)

BUILTIN_CATALOG = "builtin.yaml"


def build_entry(definition: TypeDefinition) -> MimeTypeEntry:
    """Build a frozen entry from a validated type definition."""
    builder = (
        MimeTypeBuilder(definition.name)
        .set_acronym(definition.acronym)
        .set_description(definition.description)
        .set_uniform_type_identifier(definition.uti)
    )
    for link in definition.links:
        builder.add_link(link)
    for extension in definition.extensions:
        builder.add_extension(extension)

    reach = 0
    for signature in definition.magics:
        magic = signature.to_magic()
        builder.add_magic(magic)
        reach = max(reach, magic.reach)
    builder.set_min_length(reach)

    for root in definition.root_xml:
        builder.add_root_xml(root.namespace, root.local_name)
    return builder.build()


class CatalogLoader:
    """Read catalog documents and turn their definitions into entries."""

    def load_text(self, text: str, *, source: str = "<string>") -> List[MimeTypeEntry]:
        """Parse catalog YAML and return its entries in document order.

        Args:
            text: YAML document with a top-level ``types`` list.
            source: Label used in error and log messages.

        Returns:
            List[MimeTypeEntry]: Frozen entries.

        Raises:
            CatalogError: If the YAML is malformed, a definition is invalid, or a
                name appears twice.
        """
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse catalog {source}: {exc}") from exc
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog {source} must contain a mapping at the top level.")

        try:
            document = CatalogDocument.model_validate(raw)
        except ValidationError as exc:
            raise CatalogError(f"Invalid catalog {source}: {exc}") from exc

        entries = [build_entry(definition) for definition in document.types]
        _reject_duplicates(entries, source=source)
        LOGGER.info("Loaded %d media types from %s", len(entries), source)
        return entries

    def load_path(self, path: Path) -> List[MimeTypeEntry]:
        """Load the catalog stored at ``path``."""
        path = path.expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Unable to read catalog {path}: {exc}") from exc
        return self.load_text(text, source=str(path))

    def load_builtin(self) -> List[MimeTypeEntry]:
        """Load the catalog bundled with mimekit."""
        text = resources.files(__name__).joinpath(BUILTIN_CATALOG).read_text(encoding="utf-8")
        return self.load_text(text, source=f"builtin:{BUILTIN_CATALOG}")

    def load(self, settings: CatalogSettings) -> List[MimeTypeEntry]:
        """Load the builtin catalog and/or the configured file.

        Raises:
            CatalogError: If no source is enabled, a source is invalid, or both
                sources define the same name.
        """
        entries: List[MimeTypeEntry] = []
        if settings.include_builtin:
            entries.extend(self.load_builtin())
        if settings.path:
            entries.extend(self.load_path(Path(settings.path)))
        if not settings.include_builtin and not settings.path:
            raise CatalogError(
                "No catalog configured; set catalog.path or catalog.include_builtin."
            )
        _reject_duplicates(entries, source="configured catalogs")
        return entries


def _reject_duplicates(entries: Iterable[MimeTypeEntry], *, source: str) -> None:
    seen: set[MimeTypeEntry] = set()
    for entry in entries:
        if entry in seen:
            raise CatalogError(f"Media type {entry} is defined more than once in {source}.")
        seen.add(entry)


__all__ = ["BUILTIN_CATALOG", "CatalogError", "CatalogLoader", "build_entry"]
