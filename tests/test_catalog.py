"""Tests for loading YAML type catalogs."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from mimekit.catalog import CatalogError, CatalogLoader
from mimekit.config.models import CatalogSettings
from mimekit.mime import FrozenEntryError, MimeTypeBuilder, parse

_SAMPLE = textwrap.dedent(
    """\
    types:
      - name: Application/X-Demo
        acronym: DEMO
        description: Demo format
        uti: com.example.demo
        links: [https://example.com/demo]
        extensions: [.DEMO, dmo, demo]
        magics:
          - pattern: "DEMO"
          - hex: "00ff"
            offset: 8
        root_xml:
          - namespace: urn:demo
            local_name: demo
      - name: text/x-notes
        extensions: [notes]
    """
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "catalog.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_text_builds_entries_in_order() -> None:
    entries = CatalogLoader().load_text(_SAMPLE)

    assert [entry.name for entry in entries] == ["application/x-demo", "text/x-notes"]
    demo = entries[0]
    assert demo == parse("application/x-demo")
    assert demo.acronym == "DEMO"
    assert demo.description == "Demo format"
    assert demo.uniform_type_identifier == "com.example.demo"
    assert demo.links == ("https://example.com/demo",)
    assert demo.extensions == ("demo", "dmo")
    assert demo.extension == "demo"
    assert demo.min_length == 10
    assert demo.matches(b"DEMO file")
    assert demo.matches(b"12345678\x00\xff")
    assert not demo.matches(b"12345678\x00\xfe")
    assert demo.matches_xml("urn:demo", "demo")
    assert not entries[1].has_magic


def test_loaded_entries_are_frozen() -> None:
    (entry, _) = CatalogLoader().load_text(_SAMPLE)

    with pytest.raises(FrozenEntryError):
        MimeTypeBuilder(entry)


def test_load_path(tmp_path: Path) -> None:
    entries = CatalogLoader().load_path(_write(tmp_path, _SAMPLE))

    assert len(entries) == 2


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        CatalogLoader().load_path(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "types: [",
        "- just\n- a list\n",
        "types:\n  - name: not-a-type\n",
        "types:\n  - name: a/b\n    unknown: 1\n",
        "types:\n  - name: a/b\n    magics:\n      - offset: 2\n",
        "types:\n  - name: a/b\n    magics:\n      - pattern: x\n        hex: '78'\n",
        "types:\n  - name: a/b\n    magics:\n      - hex: 'zz'\n",
        "types:\n  - name: a/b\n    magics:\n      - pattern: x\n        offset: 4\n        offset_end: 1\n",
        "types:\n  - name: a/b\n    root_xml:\n      - namespace: ''\n",
        "types:\n  - name: a/b\n  - name: A/B\n",
    ],
)
def test_invalid_catalogs_raise(text: str) -> None:
    with pytest.raises(CatalogError):
        CatalogLoader().load_text(text)


def test_empty_document_has_no_types() -> None:
    assert CatalogLoader().load_text("") == []


def test_builtin_catalog_loads() -> None:
    entries = CatalogLoader().load_builtin()
    names = {entry.name for entry in entries}

    assert {"application/pdf", "image/png", "image/svg+xml", "text/plain"} <= names
    png = next(entry for entry in entries if entry.name == "image/png")
    assert png.matches(b"\x89PNG\r\n\x1a\n\x00\x00")
    assert png.extension == "png"


def test_load_combines_builtin_and_file(tmp_path: Path) -> None:
    path = _write(tmp_path, _SAMPLE)

    entries = CatalogLoader().load(CatalogSettings(path=str(path), include_builtin=True))
    names = [entry.name for entry in entries]

    assert "application/pdf" in names
    assert names[-2:] == ["application/x-demo", "text/x-notes"]


def test_load_rejects_names_shared_with_builtin(tmp_path: Path) -> None:
    path = _write(tmp_path, "types:\n  - name: application/pdf\n")

    with pytest.raises(CatalogError):
        CatalogLoader().load(CatalogSettings(path=str(path)))


def test_load_requires_a_source() -> None:
    with pytest.raises(CatalogError):
        CatalogLoader().load(CatalogSettings(include_builtin=False))
