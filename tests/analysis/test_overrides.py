"""Tests for license override functionality."""

from datetime import datetime, timedelta, timezone

from osv_policy.analysis.overrides import apply_license_overrides
from osv_policy.models.config import Config, License, PackageOverrideEntry
from osv_policy.models.package import PackageInfo, PackageVulns

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def make_package(name: str, licenses: list[str]) -> PackageVulns:
    return PackageVulns(
        package=PackageInfo(name=name, version="2.0.0", ecosystem="PyPI"),
        licenses=licenses,
    )


class TestApplyLicenseOverrides:
    """Tests for apply_license_overrides function."""

    def test_no_overrides_returns_packages_unchanged(self) -> None:
        """Test that configs without overrides leave packages alone."""
        packages = [make_package("requests", ["Apache-2.0"])]

        assert apply_license_overrides(packages, Config()) is packages

    def test_replaces_detected_licenses(self) -> None:
        """Test that the override list replaces detected licenses."""
        packages = [make_package("requests", ["UNKNOWN"])]
        config = Config(
            package_overrides=[
                PackageOverrideEntry(
                    name="requests", license=License(override=["Apache-2.0", "MIT"])
                )
            ]
        )

        result = apply_license_overrides(packages, config)

        assert result[0].licenses == ["Apache-2.0", "MIT"]
        assert packages[0].licenses == ["UNKNOWN"]

    def test_reports_override(self) -> None:
        """Test that each override is reported."""
        reported: list[str] = []

        class Reporter:
            def infof(self, message: str) -> None:
                reported.append(message)

            def warnf(self, message: str) -> None:
                pass

            def errorf(self, message: str) -> None:
                pass

        config = Config(
            package_overrides=[
                PackageOverrideEntry(ecosystem="PyPI", license=License(override=["MIT"]))
            ]
        )

        apply_license_overrides([make_package("click", [])], config, Reporter())

        assert reported == ["Overriding license for package PyPI/click/2.0.0 with MIT"]

    def test_non_matching_package_unchanged(self) -> None:
        """Test that packages not matched keep their licenses."""
        packages = [make_package("click", ["BSD-3-Clause"])]
        config = Config(
            package_overrides=[
                PackageOverrideEntry(name="requests", license=License(override=["MIT"]))
            ]
        )

        result = apply_license_overrides(packages, config)

        assert result == packages

    def test_expired_override_not_applied(self) -> None:
        """Test that an expired override leaves the license alone."""
        packages = [make_package("requests", ["UNKNOWN"])]
        config = Config(
            package_overrides=[
                PackageOverrideEntry(
                    name="requests",
                    license=License(override=["MIT"]),
                    effective_until=NOW - timedelta(seconds=1),
                )
            ]
        )

        result = apply_license_overrides(packages, config, now=NOW)

        assert result[0].licenses == ["UNKNOWN"]

    def test_ignore_rule_before_license_rule(self) -> None:
        """Test that an earlier ignore-only entry does not block the license entry."""
        packages = [make_package("requests", [])]
        config = Config(
            package_overrides=[
                PackageOverrideEntry(name="requests", ignore=True),
                PackageOverrideEntry(name="requests", license=License(override=["ISC"])),
            ]
        )

        result = apply_license_overrides(packages, config)

        assert result[0].licenses == ["ISC"]
