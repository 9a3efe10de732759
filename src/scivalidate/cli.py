"""scivalidate Command Line Interface.

Usage:
    scivalidate --help
    scivalidate init -n thermal_model
    scivalidate check -f suite.yaml
    scivalidate run -f suite.yaml --format markdown -o summary.md
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from scivalidate import __version__

LOGGER = logging.getLogger("scivalidate.cli")

EXAMPLE_SERIES_CSV = """\
expected,found
20.1,20.4
20.8,21.0
21.5,21.9
22.3,22.4
22.9,23.3
23.4,23.5
23.1,23.6
22.6,22.8
"""


@click.group()
@click.version_option(version=__version__, prog_name="scivalidate")
@click.option(
    "-q", "--quiet", is_flag=True, help="Suppress INFO messages, show warnings/errors only"
)
@click.option("--debug", is_flag=True, help="Enable DEBUG logging for troubleshooting")
def cli(quiet: bool, debug: bool) -> None:
    """scivalidate: validate scientific results against reference data.

    Compares computed values against expected values, writes a Markdown
    report with metrics and charts, and fails if any comparison is outside
    its allowed bounds.
    """
    from scivalidate.logging_utils import setup_logging

    setup_logging(quiet=quiet, debug=debug)


def _load_config(config_file: Path):
    """Load a SuiteConfig, exiting on error."""
    from scivalidate.config import SuiteConfig
    from scivalidate.exceptions import ConfigError

    config_file = Path(config_file).resolve()
    if not config_file.exists():
        click.echo(f"Error: Config file not found: {config_file}", err=True)
        click.echo("Run 'scivalidate init -n <name>' to create a validation project.", err=True)
        sys.exit(1)

    click.echo(f"Loading config: {config_file}")
    try:
        return SuiteConfig.from_yaml(config_file)
    except (ConfigError, ValidationError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "-n",
    "--name",
    required=True,
    help="Name for the validation project (will create a directory with this name).",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Parent directory for the project. Defaults to current directory.",
)
def init(name: str, output_dir: Optional[Path]) -> None:
    """Initialize a new validation project.

    Creates a new directory NAME containing:
      - suite.yaml: Template suite configuration to edit
      - data/series.csv: Example data used by the template

    \b
    Example:
        scivalidate init -n thermal_model
        scivalidate init -n thermal_model -o /path/to/projects
    """
    from scivalidate.config import generate_suite_template

    if output_dir is None:
        output_dir = Path.cwd()
    else:
        output_dir = Path(output_dir).resolve()

    project_dir = output_dir / name
    if project_dir.exists():
        click.echo(f"Error: Directory already exists: {project_dir}", err=True)
        sys.exit(1)

    try:
        (project_dir / "data").mkdir(parents=True)
        (project_dir / "suite.yaml").write_text(generate_suite_template(name))
        (project_dir / "data" / "series.csv").write_text(EXAMPLE_SERIES_CSV)
    except OSError as e:
        click.echo(f"Error creating project: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created validation project: {project_dir}")
    click.echo("")
    click.echo("Next steps:")
    click.echo(f"  1. cd {project_dir}")
    click.echo("  2. Edit suite.yaml and put your data under data/")
    click.echo("  3. scivalidate run")


@cli.command()
@click.option(
    "-f",
    "--file",
    "config_file",
    type=click.Path(path_type=Path),
    default="suite.yaml",
    help="Path to suite.yaml config file.",
)
def check(config_file: Path) -> None:
    """Validate a suite configuration and its data files without running it."""
    config = _load_config(config_file)

    errors = config.validate_config()
    if errors:
        click.echo("Configuration problems:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    click.echo(f"Suite '{config.name}' is valid ({len(config.entries)} entries)")
    for entry in config.entries:
        click.echo(f"  - {entry.title} [{entry.type}]")


@cli.command()
@click.option(
    "-f",
    "--file",
    "config_file",
    type=click.Path(path_type=Path),
    default="suite.yaml",
    help="Path to suite.yaml config file.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "markdown", "json"]),
    default="table",
    help="Summary format: table (default), markdown, or json.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the summary to this file.",
)
def run(config_file: Path, output_format: str, output_path: Optional[Path]) -> None:
    """Run a validation suite and write its report.

    The JSON summary of the run is saved next to the report as
    ``<report stem>.summary.json``. Exits with status 1 if any entry failed.

    \b
    Example:
        scivalidate run
        scivalidate run -f suite.yaml --format markdown -o summary.md
    """
    from scivalidate.exceptions import ParseError, ReportWriteError
    from scivalidate.formatters import format_result

    config = _load_config(config_file)

    try:
        suite = config.build_suite()
    except ParseError as e:
        click.echo(f"Error reading data: {e}", err=True)
        sys.exit(1)

    try:
        result = suite.run()
    except ReportWriteError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    destination = suite.destination
    json_path = result.save(destination.with_name(f"{destination.stem}.summary.json"))
    LOGGER.info(f"Saved run summary: {json_path}")

    formatted = format_result(result, output_format)
    click.echo(formatted)

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(formatted)
        click.echo(f"Summary saved to: {output_path}")

    click.echo(f"Report written to: {suite.destination}")
    if not result.success:
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
