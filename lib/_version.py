"""Version information, kept free of third-party imports."""

__version__ = "1.0.0"
__version_date__ = "2026-10-17"
