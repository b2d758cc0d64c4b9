"""Local persistence: SQLite key-value cache, config store and migrations."""

from .config_store import ConfigStore
from .local_cache import CONFIG_KEY, DOCUMENT_KEY, LocalCache

__all__ = ["CONFIG_KEY", "DOCUMENT_KEY", "ConfigStore", "LocalCache"]
