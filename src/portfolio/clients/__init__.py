from .query_cache import CacheEntry, QueryCache
from .settings_client import SettingsClient, SettingsFetchError, SettingsResolver

__all__ = [
    "CacheEntry",
    "QueryCache",
    "SettingsClient",
    "SettingsFetchError",
    "SettingsResolver",
]
