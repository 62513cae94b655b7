"""Custom exceptions for osv-policy."""


class OsvPolicyError(Exception):
    """Base exception for all osv-policy errors."""

    pass


class ConfigurationError(OsvPolicyError):
    """Exception raised when a configuration file cannot be read or decoded."""

    pass


class DiscoveryError(OsvPolicyError):
    """Exception raised when a target path cannot be inspected."""

    pass


class InputError(OsvPolicyError):
    """Exception raised when scan results supplied for filtering are invalid."""

    pass
