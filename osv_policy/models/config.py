"""Configuration Pydantic models and rule matching for osv-policy.

Field aliases follow the keys used in ``osv-scanner.toml``, so a decoded
document validates directly into :class:`Config`. Python names are accepted
as well when building configs in code.
"""
from __future__ import annotations

import warnings
from datetime import date, datetime, time, timezone
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, Field, field_validator

from osv_policy.models.package import PackageInfo, PackageVulns


def _local_date_to_datetime(value: Any) -> Any:
    """Turn a TOML local date into local midnight, leave anything else alone."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time())
    return value


def is_rule_in_effect(until: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Apply the expiry policy shared by every rule kind.

    A rule without an expiry is in effect indefinitely. Otherwise it is in
    effect only while ``until`` is strictly after the current moment. Aware
    timestamps are compared as instants; naive ones against local wall-clock
    time.

    Args:
        until: Expiry timestamp of the rule, or None.
        now: Moment of evaluation. Defaults to the current time.

    Returns:
        True if the rule still applies.
    """
    if until is None:
        return True

    if until.tzinfo is None:
        if now is None:
            current = datetime.now()
        elif now.tzinfo is None:
            current = now
        else:
            current = now.astimezone().replace(tzinfo=None)
    else:
        if now is None:
            current = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            current = now.astimezone()
        else:
            current = now

    return until > current


class IgnoreEntry(BaseModel):
    """Rule suppressing a single vulnerability identifier."""

    model_config = {"extra": "ignore", "frozen": True, "populate_by_name": True}

    id: str = Field(default="", description="Vulnerability identifier to ignore")
    ignore_until: Optional[datetime] = Field(
        default=None,
        alias="ignoreUntil",
        description="Stop ignoring after this moment (None = indefinitely)",
    )
    reason: str = Field(default="", description="Why the vulnerability is ignored")

    @field_validator("ignore_until", mode="before")
    @classmethod
    def coerce_local_date(cls, value: Any) -> Any:
        return _local_date_to_datetime(value)


class License(BaseModel):
    """License values forced onto matching packages."""

    model_config = {"extra": "ignore", "frozen": True}

    override: List[str] = Field(
        default_factory=list,
        description="License identifiers replacing the detected ones",
    )


class PackageOverrideEntry(BaseModel):
    """Rule matching packages to ignore them or override their license.

    Empty match fields act as wildcards.
    """

    model_config = {"extra": "ignore", "frozen": True, "populate_by_name": True}

    name: str = Field(default="", description="Package name to match")
    # If the version is empty, the entry applies to all versions.
    version: str = Field(default="", description="Package version to match")
    ecosystem: str = Field(default="", description="Ecosystem to match")
    group: str = Field(default="", description="Dependency group the package must be in")
    ignore: bool = Field(default=False, description="Suppress the whole package")
    license: License = Field(default_factory=License, description="License override")
    effective_until: Optional[datetime] = Field(
        default=None,
        alias="effectiveUntil",
        description="Stop applying after this moment (None = indefinitely)",
    )
    reason: str = Field(default="", description="Why the override exists")

    @field_validator("effective_until", mode="before")
    @classmethod
    def coerce_local_date(cls, value: Any) -> Any:
        return _local_date_to_datetime(value)

    def matches(self, pkg: PackageVulns) -> bool:
        """Check whether every populated match field agrees with the package."""
        if self.name and self.name != pkg.package.name:
            return False
        if self.version and self.version != pkg.package.version:
            return False
        if self.ecosystem and self.ecosystem != pkg.package.ecosystem:
            return False
        if self.group and self.group not in pkg.dep_groups:
            return False
        return True


class Config(BaseModel):
    """Effective policy for one target.

    Rule order is significant: the first matching entry wins.
    """

    model_config = {"extra": "ignore", "frozen": True, "populate_by_name": True}

    ignored_vulns: List[IgnoreEntry] = Field(
        default_factory=list,
        alias="IgnoredVulns",
        description="Vulnerabilities to ignore",
    )
    package_overrides: List[PackageOverrideEntry] = Field(
        default_factory=list,
        alias="PackageOverrides",
        description="Package ignore and license override rules",
    )
    load_path: str = Field(
        default="",
        alias="LoadPath",
        description="Where this config was loaded from (empty for the default)",
    )
    go_version_override: str = Field(
        default="",
        alias="GoVersionOverride",
        description="Go toolchain version to assume instead of the detected one",
    )

    def with_load_path(self, path: str) -> Config:
        """Return a copy stamped with the location it was loaded from."""
        return self.model_copy(update={"load_path": path})

    def should_ignore(
        self, vuln_id: str, now: Optional[datetime] = None
    ) -> tuple[bool, IgnoreEntry]:
        """Determine whether a vulnerability should be ignored.

        Args:
            vuln_id: Identifier of the vulnerability.
            now: Moment of evaluation. Defaults to the current time.

        Returns:
            Tuple of the decision and the first matching entry. The entry is
            returned even when it has expired; an empty entry means no match.
        """
        for entry in self.ignored_vulns:
            if entry.id == vuln_id:
                return is_rule_in_effect(entry.ignore_until, now), entry
        return False, IgnoreEntry()

    def _filter_package_entries(
        self,
        pkg: PackageVulns,
        condition: Callable[[PackageOverrideEntry], bool],
        now: Optional[datetime] = None,
    ) -> tuple[bool, PackageOverrideEntry]:
        for entry in self.package_overrides:
            if entry.matches(pkg) and condition(entry):
                return is_rule_in_effect(entry.effective_until, now), entry
        return False, PackageOverrideEntry()

    def should_ignore_package(
        self, pkg: PackageVulns, now: Optional[datetime] = None
    ) -> tuple[bool, PackageOverrideEntry]:
        """Determine if the package should be ignored based on override entries.

        Args:
            pkg: Package record to check.
            now: Moment of evaluation. Defaults to the current time.

        Returns:
            Tuple of the decision and the first matching ignore entry.
        """
        return self._filter_package_entries(pkg, lambda e: e.ignore, now)

    def should_override_package_license(
        self, pkg: PackageVulns, now: Optional[datetime] = None
    ) -> tuple[bool, PackageOverrideEntry]:
        """Determine if the package license should be replaced.

        Args:
            pkg: Package record to check.
            now: Moment of evaluation. Defaults to the current time.

        Returns:
            Tuple of the decision and the first matching license entry.
        """
        return self._filter_package_entries(
            pkg, lambda e: len(e.license.override) > 0, now
        )

    def should_ignore_package_version(
        self, name: str, version: str, ecosystem: str
    ) -> tuple[bool, PackageOverrideEntry]:
        """Deprecated: use :meth:`should_ignore_package` instead."""
        warnings.warn(
            "should_ignore_package_version is deprecated, "
            "use should_ignore_package instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.should_ignore_package(_synthetic_package(name, version, ecosystem))

    def should_override_package_version_license(
        self, name: str, version: str, ecosystem: str
    ) -> tuple[bool, PackageOverrideEntry]:
        """Deprecated: use :meth:`should_override_package_license` instead."""
        warnings.warn(
            "should_override_package_version_license is deprecated, "
            "use should_override_package_license instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.should_override_package_license(
            _synthetic_package(name, version, ecosystem)
        )


def _synthetic_package(name: str, version: str, ecosystem: str) -> PackageVulns:
    return PackageVulns(
        package=PackageInfo(name=name, version=version, ecosystem=ecosystem)
    )
