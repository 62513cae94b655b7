"""Per-target vulnerability and license policy resolution for OSV scans."""

__version__ = "0.1.0"
