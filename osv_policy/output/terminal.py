"""Terminal output formatters using Rich."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from osv_policy.analysis.filtering import FilterResult
from osv_policy.models.config import Config, is_rule_in_effect


def _format_until(until: Optional[datetime], now: Optional[datetime] = None) -> str:
    if until is None:
        return "never"
    label = until.isoformat()
    if not is_rule_in_effect(until, now):
        return f"[red]{label} (expired)[/red]"
    return label


class ConfigFormatter:
    """Display an effective config as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_config(self, config: Config, now: Optional[datetime] = None) -> None:
        """Format and display a config.

        Args:
            config: The config to display.
            now: Moment used to flag expired rules. Defaults to now.
        """
        source = config.load_path or "default (no config file)"
        self._console.print(f"[bold]Config:[/bold] {escape(source)}")
        if config.go_version_override:
            self._console.print(
                f"[bold]Go version override:[/bold] {escape(config.go_version_override)}"
            )

        if not config.ignored_vulns and not config.package_overrides:
            self._console.print("[yellow]No rules configured[/yellow]")
            return

        if config.ignored_vulns:
            table = Table(title="Ignored Vulnerabilities")
            table.add_column("ID", style="cyan", no_wrap=True)
            table.add_column("Until")
            table.add_column("Reason")
            for entry in config.ignored_vulns:
                table.add_row(
                    escape(entry.id),
                    _format_until(entry.ignore_until, now),
                    escape(entry.reason),
                )
            self._console.print(table)

        if config.package_overrides:
            table = Table(title="Package Overrides")
            table.add_column("Ecosystem", style="magenta")
            table.add_column("Name", style="cyan", no_wrap=True)
            table.add_column("Version")
            table.add_column("Group")
            table.add_column("Action", style="green")
            table.add_column("Until")
            table.add_column("Reason")
            for entry in config.package_overrides:
                actions: list[str] = []
                if entry.ignore:
                    actions.append("ignore")
                if entry.license.override:
                    actions.append("license: " + ", ".join(entry.license.override))
                table.add_row(
                    escape(entry.ecosystem or "*"),
                    escape(entry.name or "*"),
                    escape(entry.version or "*"),
                    escape(entry.group or "*"),
                    escape("; ".join(actions) or "none"),
                    _format_until(entry.effective_until, now),
                    escape(entry.reason),
                )
            self._console.print(table)


class FilterFormatter:
    """Display filtered scan results as a Rich table."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console if console is not None else Console()

    def format_filter_result(self, result: FilterResult) -> None:
        """Format and display the packages left after filtering.

        Args:
            result: The filter result to display.
        """
        self._console.print(
            f"Filtered {result.ignored_package_count} package(s) and "
            f"{result.ignored_vuln_count} vulnerability(ies)"
        )
        if not result.packages:
            self._console.print("[green]No packages left after filtering[/green]")
            return

        table = Table(title="Filtered Scan Results")
        table.add_column("Ecosystem", style="magenta")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version")
        table.add_column("Licenses", style="green")
        table.add_column("Vulnerabilities", style="red")

        for pkg in result.packages:
            licenses = escape(", ".join(pkg.licenses)) or "[yellow]Unknown[/yellow]"
            vulns = ", ".join(v.id for v in pkg.vulnerabilities) or "-"
            table.add_row(
                escape(pkg.package.ecosystem),
                escape(pkg.package.name),
                escape(pkg.package.version),
                licenses,
                escape(vulns),
            )

        self._console.print(table)
