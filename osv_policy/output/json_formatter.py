"""JSON output formatters for configs and filter results."""
import json
from datetime import datetime, timezone
from typing import Any

from osv_policy import __version__
from osv_policy.analysis.filtering import FilterResult
from osv_policy.models.config import Config


def _build_metadata() -> dict[str, Any]:
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "generated_at": timestamp,
        "tool_version": __version__,
    }


class ConfigJsonFormatter:
    """Format an effective config as JSON.

    Keys use the same names as ``osv-scanner.toml``.
    """

    def format_config(self, config: Config) -> str:
        """Format config as JSON string.

        Args:
            config: The config to format.

        Returns:
            JSON string representation of the config.
        """
        output = {
            "metadata": _build_metadata(),
            "config": config.model_dump(mode="json", by_alias=True),
        }
        return json.dumps(output, indent=2)


class FilterJsonFormatter:
    """Format filter results as JSON for CI/CD integration."""

    def format_filter_result(self, result: FilterResult) -> str:
        """Format filter result as JSON string.

        Args:
            result: The filter result to format.

        Returns:
            JSON string representation of the filter result.
        """
        output = {
            "metadata": _build_metadata(),
            "summary": {
                "remaining_packages": len(result.packages),
                "ignored_packages": result.ignored_package_count,
                "ignored_vulnerabilities": result.ignored_vuln_count,
            },
            "packages": [pkg.model_dump(mode="json") for pkg in result.packages],
        }
        return json.dumps(output, indent=2)
