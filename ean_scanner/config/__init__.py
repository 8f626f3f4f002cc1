"""
Configuration management for the EAN line scanner.
"""

from ean_scanner.config.logging import configure_logging
from ean_scanner.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
