"""Command line interface for filekind."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from filekind.classification import (
    ClassificationEngine,
    ClassificationRequest,
    requires_content,
)
from filekind.config import ConfigError, ConfigManager, FilekindConfig, resolve_with_precedence
from filekind.ingestion import IngestionPipeline
from filekind.ingestion.detectors import TypeDetector
from filekind.ingestion.discovery import DirectoryScanner
from filekind.ingestion.extractors import ContentReader
from filekind.organization import StoragePlan, StoragePlanner

console = Console()


def _configure_logging(level: str) -> None:
    """Attach a rich handler to the ``filekind`` logger at ``level``."""
    logger = logging.getLogger("filekind")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(level)
    logger.addHandler(handler)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command.

    Raises:
        SystemExit: When emitting JSON output.
        click.ClickException: For non-JSON flows.
    """
    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)
    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Print ``message`` unless quiet or summary mode filters it out."""
    if quiet and mode != "error":
        return
    if summary_only and mode not in {"summary", "warning", "error"}:
        return
    console.print(message)


def _plan_table(plan: StoragePlan) -> Table:
    table = Table(title="Classification")
    for column in ("File", "Label", "Target", "Destination", "Size"):
        table.add_column(column)
    for operation in plan.operations:
        table.add_row(
            operation.name,
            operation.label,
            operation.target.value,
            operation.destination,
            operation.size or "-",
        )
    return table


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping in the config file."
            )
        node = existing
    node[path[-1]] = value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="filekind")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Classify uploads by kind and route JSON to SQL or document storage."""
    if verbose:
        _configure_logging("DEBUG")


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("-r", "--recursive", is_flag=True, help="Include all subdirectories.")
@click.option("--json", "json_output", is_flag=True, help="Emit the storage plan as JSON.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
def classify(
    paths: tuple[Path, ...],
    recursive: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Classify files under PATHS and show where each would be stored."""
    overrides = {"processing.recurse_directories": True} if recursive else None
    try:
        config = ConfigManager().load(cli_overrides=overrides)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    if not logging.getLogger("filekind").handlers:
        _configure_logging(config.logging.level)

    quiet = quiet or config.cli.quiet_default
    summary_only = summary_mode or config.cli.summary_default
    processing = config.processing

    pipeline = IngestionPipeline(
        scanner=DirectoryScanner(
            recursive=processing.recurse_directories,
            include_hidden=processing.process_hidden_files,
            follow_symlinks=processing.follow_symlinks,
            max_size_bytes=processing.max_file_size_mb * 1024 * 1024,
            max_content_bytes=processing.max_json_kb * 1024,
        ),
        detector=TypeDetector(),
        reader=ContentReader(),
        processing=processing,
        wants_content=requires_content,
    )
    ingestion = pipeline.run(paths)

    engine = ClassificationEngine(max_json_bytes=processing.max_json_kb * 1024)
    batch = engine.classify(
        ClassificationRequest(descriptor=descriptor) for descriptor in ingestion.processed
    )
    planner = StoragePlanner(
        base_path=config.organization.base_path,
        timestamp_names=config.organization.timestamp_names,
    )
    plan = planner.build_plan(ingestion.processed, batch.decisions)
    errors = [*ingestion.errors, *batch.errors]

    if json_output:
        payload = plan.model_dump(mode="json")
        payload["skipped"] = [str(path) for path in ingestion.skipped]
        payload["errors"] = errors
        console.print_json(data=payload)
        return

    if plan.operations:
        _emit_message(_plan_table(plan), mode="detail", quiet=quiet, summary_only=summary_only)
    for note in plan.notes:
        _emit_message(f"[yellow]{note}[/yellow]", mode="warning", quiet=quiet, summary_only=summary_only)
    for error in errors:
        _emit_message(f"[red]{error}[/red]", mode="error", quiet=quiet, summary_only=summary_only)

    counts = plan.counts()
    metrics = ", ".join(f"{key}={value}" for key, value in counts.items())
    _emit_message(
        f"[green]Classified {len(plan.operations)} file(s): {metrics}, "
        f"quarantined={len(plan.quarantined)}, skipped={len(ingestion.skipped)}, "
        f"errors={len(errors)}.[/green]",
        mode="summary",
        quiet=quiet,
        summary_only=summary_only,
    )


@cli.command()
@click.argument("name")
@click.option("--media-type", default="", help="Declared media type, e.g. image/png.")
@click.option(
    "--content-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File whose text is used for JSON shape detection.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the decision as JSON.")
def inspect(name: str, media_type: str, content_file: Path | None, json_output: bool) -> None:
    """Classify NAME with an optional media type without scanning the filesystem."""
    try:
        config = ConfigManager().load()
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    limit = config.processing.max_json_kb * 1024
    content = None
    if content_file is not None:
        try:
            content = ContentReader().read_text(content_file, limit=limit)
        except OSError as exc:
            _handle_cli_error(
                f"Unable to read {content_file}: {exc}",
                code="read_error",
                json_output=json_output,
                original=exc,
            )
            return

    decision = ClassificationEngine(max_json_bytes=limit).classify_file(name, media_type, content)
    if content_file is not None and content is None:
        decision.notes.append(f"{content_file.name} is larger than {limit} bytes; not read.")
    if json_output:
        payload = decision.model_dump(mode="json")
        payload["label"] = decision.label
        console.print_json(data=payload)
        return

    console.print(f"[bold]{name}[/bold]: {decision.label}")
    for note in decision.notes:
        console.print(f"[yellow]{note}[/yellow]")


@cli.group()
def config() -> None:
    """Manage filekind configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
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

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'processing.max_json_kb'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    before = manager.read_text().splitlines()
    try:
        file_data = manager.load_file_overrides()
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FilekindConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = [
        line
        for line in difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
        if "Last updated:" not in line
    ]
    if not any(line.startswith(("+", "-")) and not line.startswith(("+++", "---")) for line in diff):
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

    if edited is None or edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=FilekindConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
