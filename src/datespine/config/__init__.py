"""
Configuration management: YAML loading, environment resolution, calendar settings.
"""

from datespine.config.loader import Config, load_config
from datespine.config.resolver import resolve_config
from datespine.config.settings import CalendarSettings, Destination

__all__ = [
    "load_config",
    "Config",
    "resolve_config",
    "CalendarSettings",
    "Destination",
]
