"""CLI entry point for osv-policy."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape

from osv_policy import __version__
from osv_policy.analysis.filtering import FilterResult, filter_package_vulns
from osv_policy.analysis.overrides import apply_license_overrides
from osv_policy.config import ConfigManager
from osv_policy.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from osv_policy.exceptions import InputError, OsvPolicyError
from osv_policy.models.config import Config
from osv_policy.models.package import PackageVulns
from osv_policy.output.json_formatter import ConfigJsonFormatter, FilterJsonFormatter
from osv_policy.output.terminal import ConfigFormatter, FilterFormatter
from osv_policy.reporter import ConsoleReporter

# Module-level console for consistent output
_console = Console()
# Separate console for diagnostics and errors (writes to stderr)
_error_console = Console(stderr=True)

_packages_adapter = TypeAdapter(list[PackageVulns])

_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format (default: terminal).",
)
_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file overriding every per-target osv-scanner.toml.",
)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """OSV Policy - Resolve and apply osv-scanner.toml ignore rules.

    Looks up the osv-scanner.toml next to each scanned target and applies
    its vulnerability ignores, package ignores and license overrides.

    \b
    Examples:
        osv-policy show path/to/requirements.txt
        osv-policy filter path/to/requirements.txt --packages results.json
        osv-policy filter . --packages results.json --config policy.toml
    """
    pass


@main.command()
@click.argument("target", type=click.Path())
@_format_option
@_config_option
def show(target: str, output_format: str, config_path: Optional[str]) -> None:
    """Show the config that applies to TARGET.

    \b
    Examples:
        osv-policy show package-lock.json
        osv-policy show services/api --format json
    """
    format_value = output_format.lower()
    try:
        manager = _build_manager(config_path, ConsoleReporter(console=_error_console))
        config = manager.get(target)
        _display_config(config, format_value)
        sys.exit(EXIT_SUCCESS)
    except OsvPolicyError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command(name="filter")
@click.argument("target", type=click.Path())
@click.option(
    "--packages",
    "-p",
    "packages_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="JSON file with the package records found in TARGET.",
)
@_format_option
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Do not report each filtered package or vulnerability.",
)
@_config_option
def filter_command(
    target: str,
    packages_path: str,
    output_format: str,
    output_path: Optional[str],
    quiet_flag: bool,
    config_path: Optional[str],
) -> None:
    """Apply TARGET's ignore rules and license overrides to scan results.

    Exits with 1 when vulnerabilities remain after filtering.

    \b
    Examples:
        osv-policy filter requirements.txt --packages results.json
        osv-policy filter . -p results.json --format json -o filtered.json
    """
    format_value = output_format.lower()
    try:
        reporter = ConsoleReporter(console=_error_console, quiet=quiet_flag)
        manager = _build_manager(config_path, reporter)
        config = manager.get(target)

        packages = _load_packages(Path(packages_path))
        packages = apply_license_overrides(packages, config, reporter)
        result = filter_package_vulns(packages, config, reporter)

        _display_filter_result(result, format_value, output_path)

        if any(pkg.vulnerabilities for pkg in result.packages):
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)
    except OsvPolicyError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


def _build_manager(
    config_path: Optional[str], reporter: ConsoleReporter
) -> ConfigManager:
    """Create a manager, installing ``config_path`` as override if given.

    Raises:
        ConfigurationError: If the override config cannot be loaded.
    """
    manager = ConfigManager(reporter=reporter)
    if config_path is not None:
        manager.set_override(config_path)
    return manager


def _load_packages(path: Path) -> list[PackageVulns]:
    """Read package records from a JSON file.

    Raises:
        InputError: If the file cannot be read or is not a list of records.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read packages file '{path}': {e}") from e

    try:
        return _packages_adapter.validate_json(content)
    except ValidationError as e:
        raise InputError(f"Invalid packages file '{path}': {e}") from e


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Raises:
        InputError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_config(config: Config, format_type: str) -> None:
    if format_type == "json":
        click.echo(ConfigJsonFormatter().format_config(config))
    else:
        ConfigFormatter(console=_console).format_config(config)


def _display_filter_result(
    result: FilterResult, format_type: str, output_path: Optional[str] = None
) -> None:
    """Display filter results in the specified format.

    Args:
        result: The filter result to display.
        format_type: Output format (terminal, json).
        output_path: Optional file path to write output to.
    """
    if format_type == "json" or output_path:
        # Terminal format to file uses JSON instead
        content = FilterJsonFormatter().format_filter_result(result)
    else:
        FilterFormatter(console=_console).format_filter_result(result)
        return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: OsvPolicyError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{escape(message)}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
