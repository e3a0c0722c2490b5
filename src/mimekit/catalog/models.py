"""Pydantic models describing the YAML type catalog format."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mimekit.mime import ByteSignature, MediaType


class CatalogBaseModel(BaseModel):
    """Shared configuration for catalog models."""

    model_config = ConfigDict(extra="forbid")


class SignatureDefinition(CatalogBaseModel):
    """Byte signature of a type.

    Exactly one of ``pattern`` and ``hex`` must be given. ``pattern`` is encoded
    as Latin-1 so YAML escapes such as ``"\\x89PNG"`` map onto single bytes.

    Attributes:
        pattern: Literal text of the signature.
        hex: Hexadecimal spelling of the signature.
        offset: First offset at which the signature may start.
        offset_end: Last offset at which the signature may start.
    """

    pattern: Optional[str] = None
    hex: Optional[str] = None
    offset: int = Field(default=0, ge=0)
    offset_end: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_pattern(self) -> "SignatureDefinition":
        if (self.pattern is None) == (self.hex is None):
            raise ValueError("exactly one of 'pattern' or 'hex' is required")
        if self.offset_end is not None and self.offset_end < self.offset:
            raise ValueError("'offset_end' must not be smaller than 'offset'")
        self.to_bytes()
        return self

    def to_bytes(self) -> bytes:
        if self.hex is not None:
            return bytes.fromhex(self.hex)
        try:
            return (self.pattern or "").encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError(f"pattern must only contain Latin-1 characters: {exc}") from exc

    def to_magic(self) -> ByteSignature:
        return ByteSignature(self.to_bytes(), self.offset, self.offset_end)


class RootXmlDefinition(CatalogBaseModel):
    """XML root element that identifies a type."""

    namespace: Optional[str] = None
    local_name: Optional[str] = None

    @model_validator(mode="after")
    def _check_not_empty(self) -> "RootXmlDefinition":
        if not self.namespace and not self.local_name:
            raise ValueError("'namespace' or 'local_name' is required")
        return self


class TypeDefinition(CatalogBaseModel):
    """One media type in the catalog.

    Attributes:
        name: Media type name such as ``application/pdf``.
        acronym: Short name of the format.
        description: Human-readable description.
        uti: Uniform Type Identifier.
        links: Documentation links.
        extensions: File extensions, preferred first, without the leading dot.
        magics: Byte signatures.
        root_xml: XML root elements.
    """

    name: str
    acronym: str = ""
    description: str = ""
    uti: str = ""
    links: List[str] = Field(default_factory=list)
    extensions: List[str] = Field(default_factory=list)
    magics: List[SignatureDefinition] = Field(default_factory=list)
    root_xml: List[RootXmlDefinition] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        return str(MediaType.parse(value))

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        return [extension.strip().lstrip(".").lower() for extension in value if extension.strip()]


class CatalogDocument(CatalogBaseModel):
    """Top-level structure of a catalog file."""

    types: List[TypeDefinition] = Field(default_factory=list)


__all__ = [
    "CatalogBaseModel",
    "SignatureDefinition",
    "RootXmlDefinition",
    "TypeDefinition",
    "CatalogDocument",
]
