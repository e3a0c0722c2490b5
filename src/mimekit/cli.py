"""Command line interface for mimekit."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from mimekit.catalog import CatalogError, CatalogLoader
from mimekit.config import ConfigError, ConfigManager, MimekitConfig, resolve_with_precedence
from mimekit.config.resolver import assign_nested
from mimekit.mime import MalformedTypeError, MimeTypeEntry, is_valid, parse
from mimekit.probe import Prober, ProbeReport

console = Console()
error_console = Console(stderr=True)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output.
        click.ClickException: For non-JSON flows.
    """
    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)
    raise click.ClickException(message) from original


def _configure_logging(level: str) -> None:
    """Route log records through rich on stderr at ``level``."""
    root = logging.getLogger("mimekit")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=error_console, show_path=False))
    root.setLevel(level.upper())


def _load_config(
    ctx: click.Context, cli_overrides: dict[str, Any] | None = None, *, json_output: bool = False
) -> MimekitConfig:
    """Resolve configuration for a command and apply its logging level."""
    try:
        config = ConfigManager().load(cli_overrides=cli_overrides)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)

    level = (ctx.obj or {}).get("log_level") or config.logging.level
    _configure_logging(level)
    return config


def _catalog_overrides(catalog_path: str | None, no_builtin: bool) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if catalog_path:
        overrides["catalog.path"] = catalog_path
    if no_builtin:
        overrides["catalog.include_builtin"] = False
    return overrides


def _load_entries(config: MimekitConfig, *, json_output: bool) -> list[MimeTypeEntry]:
    try:
        return CatalogLoader().load(config.catalog)
    except CatalogError as exc:
        _handle_cli_error(str(exc), code="catalog_error", json_output=json_output, original=exc)


def _entry_payload(entry: MimeTypeEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "full_type": entry.full_type,
        "major_type": entry.major_type,
        "subtype": entry.subtype,
        "quality": entry.quality,
        "any_major_type": entry.is_any_major_type,
        "any_subtype": entry.is_any_subtype,
    }


def _report_table(report: ProbeReport) -> Table:
    table = Table(title=str(report.path), show_header=True, header_style="bold")
    table.add_column("Evidence")
    table.add_column("Media types")
    table.add_row("magic", ", ".join(report.magic_matches) or "-")
    if report.xml_root is not None:
        root = report.xml_root
        label = f"{{{root.namespace}}}{root.local_name}" if root.namespace else root.local_name
        table.add_row(f"xml root {label}", ", ".join(report.xml_matches) or "-")
    table.add_row("extension", ", ".join(report.extension_matches) or "-")
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mimekit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured logging level.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """mimekit parses media type names and sniffs files against a type catalog."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command()
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.pass_context
def validate(ctx: click.Context, name: str, json_output: bool) -> None:
    """Check that NAME is a valid type/subtype media type name."""
    config = _load_config(ctx, json_output=json_output)
    json_output = json_output or config.cli.json_default
    valid = is_valid(name)

    if json_output:
        console.print_json(data={"name": name, "valid": valid})
    elif valid:
        console.print(f"[green]{name} is a valid media type name.[/green]")
    else:
        console.print(f"[red]{name} is not a valid media type name.[/red]")
    if not valid:
        ctx.exit(1)


@cli.command("parse")
@click.argument("mime_type")
@click.option("--json", "json_output", is_flag=True, help="Emit the parsed fields as JSON.")
@click.pass_context
def parse_command(ctx: click.Context, mime_type: str, json_output: bool) -> None:
    """Parse MIME_TYPE given as type/subtype[;q=x.y]."""
    config = _load_config(ctx, json_output=json_output)
    json_output = json_output or config.cli.json_default
    try:
        entry = parse(mime_type)
    except MalformedTypeError as exc:
        _handle_cli_error(str(exc), code="malformed_type", json_output=json_output, original=exc)

    if entry is None:
        _handle_cli_error(
            "MIME_TYPE must not be empty.", code="malformed_type", json_output=json_output
        )

    payload = _entry_payload(entry)
    if json_output:
        console.print_json(data=payload)
        return

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in payload.items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)


@cli.command()
@click.option(
    "--catalog", "catalog_path", type=click.Path(dir_okay=False), help="Catalog YAML file."
)
@click.option("--no-builtin", is_flag=True, help="Skip the catalog bundled with mimekit.")
@click.option("--json", "json_output", is_flag=True, help="Emit the catalog as JSON.")
@click.pass_context
def catalog(
    ctx: click.Context, catalog_path: str | None, no_builtin: bool, json_output: bool
) -> None:
    """List the media types known to the configured catalogs."""
    config = _load_config(
        ctx, _catalog_overrides(catalog_path, no_builtin), json_output=json_output
    )
    json_output = json_output or config.cli.json_default
    entries = _load_entries(config, json_output=json_output)

    if json_output:
        console.print_json(
            data=[
                {
                    "name": entry.name,
                    "acronym": entry.acronym,
                    "description": entry.description,
                    "uti": entry.uniform_type_identifier,
                    "extensions": list(entry.extensions),
                    "links": list(entry.links),
                    "magics": len(entry.magics),
                    "root_xml": len(entry.root_xml),
                    "min_length": entry.min_length,
                }
                for entry in entries
            ]
        )
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Media type")
    table.add_column("Acronym")
    table.add_column("Extensions")
    table.add_column("Magics", justify="right")
    table.add_column("XML roots", justify="right")
    table.add_column("Description")
    for entry in sorted(entries):
        table.add_row(
            entry.name,
            entry.acronym,
            ", ".join(entry.extensions),
            str(len(entry.magics)),
            str(len(entry.root_xml)),
            entry.description,
        )
    console.print(table)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--catalog", "catalog_path", type=click.Path(dir_okay=False), help="Catalog YAML file."
)
@click.option("--no-builtin", is_flag=True, help="Skip the catalog bundled with mimekit.")
@click.option("--json", "json_output", is_flag=True, help="Emit probe reports as JSON.")
@click.option(
    "--quiet",
    is_flag=True,
    help="Suppress output; the exit status tells whether all files matched.",
)
@click.pass_context
def probe(
    ctx: click.Context,
    paths: tuple[str, ...],
    catalog_path: str | None,
    no_builtin: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Show which catalog types recognize each of PATHS."""
    config = _load_config(
        ctx, _catalog_overrides(catalog_path, no_builtin), json_output=json_output
    )
    json_output = json_output or config.cli.json_default
    quiet = quiet or config.cli.quiet_default
    prober = Prober(_load_entries(config, json_output=json_output), config.probe)

    reports: list[ProbeReport] = []
    for raw_path in paths:
        try:
            reports.append(prober.probe(Path(raw_path)))
        except OSError as exc:
            _handle_cli_error(
                f"Unable to read {raw_path}: {exc}",
                code="read_error",
                json_output=json_output,
                original=exc,
            )

    if json_output:
        console.print_json(data=[report.model_dump(mode="json") for report in reports])
    elif not quiet:
        for report in reports:
            console.print(_report_table(report))

    if not all(report.matched for report in reports):
        ctx.exit(1)


@cli.group()
def config() -> None:
    """Manage mimekit configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY."""
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'probe.sniff_xml'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        file_data = manager.load_file_overrides()
        assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=MimekitConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    # The timestamp line always changes; anything beyond it is a real edit.
    ignored = ("+++", "---", "+# Last updated", "-# Last updated")
    changed = [
        line for line in diff if line.startswith(("+", "-")) and not line.startswith(ignored)
    ]
    if not changed:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session."""
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return
    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=MimekitConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
