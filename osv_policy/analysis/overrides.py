"""License override functionality for manual license corrections."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from osv_policy.models.config import Config
from osv_policy.models.package import PackageVulns
from osv_policy.reporter import Reporter, VoidReporter


def apply_license_overrides(
    packages: list[PackageVulns],
    config: Config,
    reporter: Optional[Reporter] = None,
    now: Optional[datetime] = None,
) -> list[PackageVulns]:
    """Apply license overrides from the config to packages.

    The first override with a non-empty license list that matches a package
    and has not expired replaces the package's detected licenses.

    Args:
        packages: Packages with detected licenses.
        config: Config resolved for the packages' target.
        reporter: Receives one line per overridden package.
        now: Moment of evaluation. Defaults to the current time.

    Returns:
        List of packages with overrides applied. Packages without a
        matching override are returned unchanged.
    """
    if not config.package_overrides:
        return packages

    reporter = reporter if reporter is not None else VoidReporter()
    result: list[PackageVulns] = []
    for pkg in packages:
        override, entry = config.should_override_package_license(pkg, now)
        if override:
            licenses = list(entry.license.override)
            reporter.infof(
                f"Overriding license for package {pkg.package.display_name()} "
                f"with {', '.join(licenses)}"
            )
            result.append(pkg.model_copy(update={"licenses": licenses}))
        else:
            result.append(pkg)

    return result
