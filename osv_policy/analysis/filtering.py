"""Filtering of scan results against a target's ignore rules."""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple, Optional

from osv_policy.models.config import Config
from osv_policy.models.package import PackageVulns, Vulnerability
from osv_policy.reporter import Reporter, VoidReporter


class FilterResult(NamedTuple):
    """Result of filtering packages.

    Attributes:
        packages: Packages left after filtering, with ignored
            vulnerabilities removed.
        ignored_package_count: Number of packages dropped by package rules.
        ignored_vuln_count: Number of vulnerabilities dropped by ignore rules.
    """

    packages: list[PackageVulns]
    ignored_package_count: int
    ignored_vuln_count: int


def filter_package_vulns(
    packages: list[PackageVulns],
    config: Config,
    reporter: Optional[Reporter] = None,
    now: Optional[datetime] = None,
) -> FilterResult:
    """Remove ignored packages and vulnerabilities.

    A package matched by an ignoring override is dropped entirely. A
    vulnerability is dropped when its id or any of its aliases is ignored.
    Packages whose vulnerabilities were all ignored are dropped too, while
    packages that came in without any vulnerabilities are kept.

    Args:
        packages: Scan results for one target.
        config: Config resolved for that target.
        reporter: Receives one line per dropped package or vulnerability.
        now: Moment of evaluation. Defaults to the current time.

    Returns:
        FilterResult with the surviving packages and counts.
    """
    reporter = reporter if reporter is not None else VoidReporter()
    filtered: list[PackageVulns] = []
    ignored_packages = 0
    ignored_vulns = 0

    for pkg in packages:
        ignore, entry = config.should_ignore_package(pkg, now)
        if ignore:
            reporter.infof(
                f"Package {pkg.package.display_name()} has been filtered out "
                f"because: {entry.reason}"
            )
            ignored_packages += 1
            continue

        kept: list[Vulnerability] = []
        for vuln in pkg.vulnerabilities:
            ignore, reason = _should_ignore_vuln(config, vuln, now)
            if ignore:
                reporter.infof(
                    f"{vuln.id} and {len(vuln.aliases)} alias(es) have been "
                    f"filtered out because: {reason}"
                )
                ignored_vulns += 1
            else:
                kept.append(vuln)

        if kept or not pkg.vulnerabilities:
            filtered.append(pkg.model_copy(update={"vulnerabilities": kept}))

    return FilterResult(
        packages=filtered,
        ignored_package_count=ignored_packages,
        ignored_vuln_count=ignored_vulns,
    )


def _should_ignore_vuln(
    config: Config, vuln: Vulnerability, now: Optional[datetime]
) -> tuple[bool, str]:
    for vuln_id in [vuln.id, *vuln.aliases]:
        ignore, entry = config.should_ignore(vuln_id, now)
        if ignore:
            return True, entry.reason
    return False, ""
