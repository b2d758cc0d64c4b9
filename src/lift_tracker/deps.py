"""Construction of the process-wide persistence objects."""

from typing import Optional

from .config import Settings, get_settings
from .db.config_store import ConfigStore
from .db.local_cache import LocalCache
from .integrations.base import RemoteDocumentBackend
from .integrations.github import GitHubContentsClient
from .services.persistence import PersistenceCoordinator
from .services.tracker import TrackerService


def create_coordinator(
    settings: Optional[Settings] = None,
    remote: Optional[RemoteDocumentBackend] = None,
) -> PersistenceCoordinator:
    """Build the coordinator on the configured SQLite cache and GitHub backend."""
    settings = settings or get_settings()
    cache = LocalCache(settings.db_path)
    if remote is None:
        remote = GitHubContentsClient(
            base_url=settings.github_api_url,
            commit_message=settings.commit_message,
            timeout=settings.request_timeout,
        )
    return PersistenceCoordinator(cache, ConfigStore(cache), remote)


def create_tracker_service(coordinator: PersistenceCoordinator) -> TrackerService:
    return TrackerService(coordinator)
