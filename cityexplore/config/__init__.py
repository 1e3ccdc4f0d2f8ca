"""
Configuration package for the City Explore API.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    OverpassSettings,
    SearchSettings,
    ClientCacheSettings,
    SecuritySettings,
    DEFAULT_OVERPASS_MIRRORS,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "OverpassSettings",
    "SearchSettings",
    "ClientCacheSettings",
    "SecuritySettings",
    "DEFAULT_OVERPASS_MIRRORS",
    "settings",
    "get_settings",
    "reload_settings",
]
