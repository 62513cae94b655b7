"""Policy application for osv-policy."""
from osv_policy.analysis.filtering import FilterResult, filter_package_vulns
from osv_policy.analysis.overrides import apply_license_overrides

__all__ = [
    "FilterResult",
    "apply_license_overrides",
    "filter_package_vulns",
]
