"""
Configuration for the livestock client core
"""

from .settings import ClientSettings, load_settings, DEFAULT_BASE_URL

__all__ = ["ClientSettings", "load_settings", "DEFAULT_BASE_URL"]
