"""Persistence of the remote-store connection descriptor."""

import logging
from typing import Optional

from ..exceptions import DecodeError
from ..models.document import StorageConfig
from .local_cache import CONFIG_KEY, LocalCache


logger = logging.getLogger(__name__)


class ConfigStore:
    """Single-record store for the StorageConfig. No record means local-only mode."""

    def __init__(self, cache: LocalCache):
        self.cache = cache

    def save(self, config: StorageConfig) -> None:
        """Overwrite the stored config."""
        self.cache.write_json(CONFIG_KEY, config.to_dict())

    def get(self) -> Optional[StorageConfig]:
        """Return the stored config, or None if never set, cleared or unreadable."""
        try:
            data = self.cache.read_json(CONFIG_KEY)
        except DecodeError as e:
            logger.warning("Ignoring unreadable storage config: %s", e.message)
            return None
        if not isinstance(data, dict):
            return None
        return StorageConfig.from_dict(data)

    def clear(self) -> None:
        """Forget the remote store and go back to local-only mode."""
        self.cache.remove_item(CONFIG_KEY)
