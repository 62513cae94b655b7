"""Constants for osv-policy."""

# File looked up next to every scanned target
CONFIG_FILE_NAME = "osv-scanner.toml"

# Exit codes
EXIT_SUCCESS = 0  # No vulnerabilities left after filtering
EXIT_ISSUES = 1  # Vulnerabilities remain after filtering
EXIT_ERROR = 2  # Failed due to error
