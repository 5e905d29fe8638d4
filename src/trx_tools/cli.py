"""trx-tools CLI: top-level command group."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfoNotFoundError

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from trx_tools import __version__
from trx_tools.config import CONFIG_FILENAME, TrxToolsConfig, load_config, validate_config
from trx_tools.exceptions import TrxError
from trx_tools.reporters.html import HTMLReporter
from trx_tools.reporters.json_reporter import JSONReporter
from trx_tools.reporters.terminal import reporter
from trx_tools.services.trx_file_service import TRX_EXTENSION, TrxFileService

if TYPE_CHECKING:
    from trx_tools.models import TestRun

logger = logging.getLogger(__name__)
console = Console()


def _configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config_to_dict(config: TrxToolsConfig) -> dict[str, Any]:
    """Convert the configuration to a dictionary for display."""
    result = asdict(config)
    # The raw document duplicates the parsed sections
    result.pop("raw", None)
    return result


def _get_config(ctx: click.Context) -> TrxToolsConfig:
    config: TrxToolsConfig = ctx.obj["config"]
    return config


def _make_service(config: TrxToolsConfig) -> TrxFileService:
    try:
        naive_timezone = config.parsing.resolve_timezone()
    except (ZoneInfoNotFoundError, ValueError) as e:
        reporter.print_error(f"Invalid parsing.naive_timezone: {config.parsing.naive_timezone!r}")
        raise click.Abort from e
    return TrxFileService(logging.getLogger("trx_tools"), naive_timezone=naive_timezone)


def _collect_trx_files(service: TrxFileService, path: Path) -> list[Path]:
    if path.is_dir():
        return service.find_trx_files_in_directory(path)
    return [path]


def _read_or_abort(service: TrxFileService, trx_file: Path) -> TestRun:
    try:
        return service.read_test_run(trx_file)
    except TrxError as e:
        reporter.print_error(f"Failed to read {trx_file}: {e}")
        raise click.Abort from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config-dir",
    default=".",
    type=click.Path(file_okay=False, resolve_path=True),
    help=f"Directory containing {CONFIG_FILENAME}.",
)
@click.version_option(version=__version__, prog_name="trx-tools")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool, config_dir: str) -> None:
    """trx-tools: read Visual Studio TRX test results and render reports."""
    ctx.ensure_object(dict)
    config = load_config(config_dir)
    _configure_logging("DEBUG" if verbose else config.logging.level)
    logger.debug("Loaded configuration from %s", config_dir)
    ctx.obj["config"] = config


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the HTML reports (default: report.output_dir).",
)
@click.pass_context
def report(ctx: click.Context, path: Path, output_dir: Path | None) -> None:
    """Render HTML reports for a TRX file or every TRX file in a directory.

    Each report is written as <name>.html next to the others in the output
    directory.

    Example:
      trx-tools report TestResults/ -o reports/
    """
    config = _get_config(ctx)
    service = _make_service(config)
    html_reporter = HTMLReporter(title=config.report.title, service=service)

    trx_files = _collect_trx_files(service, path)
    if not trx_files:
        reporter.print_warning(f"No {TRX_EXTENSION} files found in {path}")
        return

    target_dir = output_dir or Path(config.report.output_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reporter.print_error(f"Cannot create output directory {target_dir}: {e}")
        raise click.Abort from e

    failures = 0
    for trx_file in trx_files:
        try:
            test_run = service.read_test_run(trx_file)
        except TrxError as e:
            reporter.print_error(f"Failed to read {trx_file}: {e}")
            failures += 1
            continue

        target = target_dir / f"{trx_file.stem}.html"
        try:
            written = asyncio.run(html_reporter.write(test_run, target))
        except OSError as e:
            reporter.print_error(f"Failed to write {target}: {e}")
            failures += 1
            continue
        reporter.print_success(f"{trx_file.name} -> {written}")

    if failures:
        reporter.print_error(f"{failures} of {len(trx_files)} TRX file(s) could not be reported")
        raise click.Abort


@cli.command()
@click.argument("trx_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the JSON snapshot instead.")
@click.pass_context
def summary(ctx: click.Context, trx_file: Path, *, as_json: bool) -> None:
    """Print a summary of a TRX file."""
    service = _make_service(_get_config(ctx))
    test_run = _read_or_abort(service, trx_file)

    if as_json:
        click.echo(JSONReporter().generate_string(test_run))
        return
    reporter.print_test_run_summary(test_run)


@cli.command()
@click.argument("trx_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the JSON file to write.",
)
@click.pass_context
def export(ctx: click.Context, trx_file: Path, output: Path) -> None:
    """Export a TRX file as a canonical JSON snapshot."""
    service = _make_service(_get_config(ctx))
    test_run = _read_or_abort(service, trx_file)
    JSONReporter().generate(test_run, output)
    reporter.print_success(f"Snapshot written to {output}")


@cli.group("config")
def config_group() -> None:
    """Inspect `.trx-tools.yml` configuration."""


@config_group.command("show")
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
@click.pass_context
def config_show(ctx: click.Context, *, as_json: bool) -> None:
    """Display the resolved configuration."""
    config_dict = _config_to_dict(_get_config(ctx))
    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
        return
    console.print("[bold cyan]Configuration:[/bold cyan]")
    click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate `.trx-tools.yml`."""
    errors = validate_config(_get_config(ctx))

    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{error}[/red]")
    raise click.Abort


def main() -> None:
    """Console-script entry point."""
    cli()
