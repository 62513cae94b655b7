"""Output formatters for osv-policy."""

from osv_policy.output.json_formatter import ConfigJsonFormatter, FilterJsonFormatter
from osv_policy.output.terminal import ConfigFormatter, FilterFormatter

__all__ = [
    "ConfigFormatter",
    "ConfigJsonFormatter",
    "FilterFormatter",
    "FilterJsonFormatter",
]
