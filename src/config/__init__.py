"""
Ludo Configuration.

Rule and feedback toggles read from the environment, plus logging setup.
"""

from src.config.settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
