"""Tests for custom exceptions."""

import pytest

from osv_policy.exceptions import (
    ConfigurationError,
    DiscoveryError,
    InputError,
    OsvPolicyError,
)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_base_error_is_exception(self) -> None:
        """Test that OsvPolicyError inherits from Exception."""
        assert issubclass(OsvPolicyError, Exception)

    @pytest.mark.parametrize("exc_type", [ConfigurationError, DiscoveryError, InputError])
    def test_errors_inherit_from_base(self, exc_type: type) -> None:
        """Test that every custom error can be caught by the base class."""
        assert issubclass(exc_type, OsvPolicyError)

    def test_configuration_error_keeps_message(self) -> None:
        """Test that ConfigurationError carries its message."""
        with pytest.raises(OsvPolicyError) as exc_info:
            raise ConfigurationError("Invalid config file")
        assert str(exc_info.value) == "Invalid config file"
