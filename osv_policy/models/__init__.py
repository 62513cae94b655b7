"""Pydantic data models for osv-policy."""

from osv_policy.models.config import (
    Config,
    IgnoreEntry,
    License,
    PackageOverrideEntry,
    is_rule_in_effect,
)
from osv_policy.models.package import PackageInfo, PackageVulns, Vulnerability

__all__ = [
    "Config",
    "IgnoreEntry",
    "License",
    "PackageInfo",
    "PackageOverrideEntry",
    "PackageVulns",
    "Vulnerability",
    "is_rule_in_effect",
]
