"""Configuration models describing mimekit settings."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MimekitBaseModel(BaseModel):
    """Shared configuration for mimekit Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class CatalogSettings(MimekitBaseModel):
    """Where media type definitions are loaded from.

    Attributes:
        path: Optional YAML catalog with additional type definitions.
        include_builtin: Whether the catalog bundled with mimekit is loaded first.
    """

    path: Optional[str] = None
    include_builtin: bool = True


class ProbeOptions(MimekitBaseModel):
    """Options governing how files are sampled and sniffed.

    Attributes:
        sample_size_bytes: Number of leading bytes read from each probed file.
        sniff_xml: Whether the sample is parsed to find an XML root element.
        check_extensions: Whether file name extensions are compared with the catalog.
    """

    sample_size_bytes: int = Field(default=65_536, gt=0)
    sniff_xml: bool = True
    check_extensions: bool = True


class LoggingSettings(MimekitBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CLIOptions(MimekitBaseModel):
    """CLI presentation defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        json_default: Whether commands emit JSON unless told otherwise.
    """

    quiet_default: bool = False
    json_default: bool = False


class MimekitConfig(MimekitBaseModel):
    """Top-level configuration for mimekit.

    Attributes:
        catalog: Catalog source settings.
        probe: File probing settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    probe: ProbeOptions = Field(default_factory=ProbeOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "MimekitBaseModel",
    "CatalogSettings",
    "ProbeOptions",
    "LoggingSettings",
    "CLIOptions",
    "MimekitConfig",
]
