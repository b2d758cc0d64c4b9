"""Pytest configuration and fixtures."""

import base64
import json
from typing import List, Optional

import pytest

from lift_tracker.db.config_store import ConfigStore
from lift_tracker.db.local_cache import LocalCache
from lift_tracker.exceptions import NotFoundError, RemoteError
from lift_tracker.integrations.base import RemoteFile
from lift_tracker.integrations.codec import decode_content, encode_document
from lift_tracker.models.document import AppDocument, StorageConfig
from lift_tracker.services.persistence import PersistenceCoordinator
from lift_tracker.services.tracker import TrackerService


class FakeRemoteBackend:
    """In-memory stand-in for the GitHub contents API with sha checking."""

    def __init__(self):
        self.content: Optional[str] = None
        self.sha: Optional[str] = None
        self.version = 0
        self.fail_fetch: Optional[Exception] = None
        self.fail_put: Optional[Exception] = None
        self.puts: List[dict] = []

    def seed(self, raw: dict) -> None:
        """Place a raw JSON document in the store."""
        self.content = base64.b64encode(json.dumps(raw).encode("utf-8")).decode("ascii")
        self.version += 1
        self.sha = f"sha-{self.version}"

    @property
    def stored(self) -> Optional[dict]:
        return decode_content(self.content) if self.content is not None else None

    async def fetch_document(self, config: StorageConfig) -> RemoteFile:
        if self.fail_fetch is not None:
            raise self.fail_fetch
        if self.content is None:
            raise NotFoundError(config.contents_path)
        return RemoteFile(content=self.content, sha=self.sha)

    async def put_document(self, config: StorageConfig, document: AppDocument, sha: Optional[str] = None) -> None:
        if self.fail_put is not None:
            raise self.fail_put
        if sha != self.sha:
            raise RemoteError("sha mismatch", status=409, body="conflict")
        self.puts.append({"sha": sha, "document": document.to_dict()})
        self.content = encode_document(document)
        self.version += 1
        self.sha = f"sha-{self.version}"


@pytest.fixture
def cache(tmp_path) -> LocalCache:
    """LocalCache on a temporary SQLite file."""
    return LocalCache(tmp_path / "tracker.db")


@pytest.fixture
def config_store(cache) -> ConfigStore:
    return ConfigStore(cache)


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig(owner="adam", repo="lifts", path="data/tracker.json", github_token="ghp_test")


@pytest.fixture
def remote() -> FakeRemoteBackend:
    return FakeRemoteBackend()


@pytest.fixture
def coordinator(cache, config_store, remote) -> PersistenceCoordinator:
    """Coordinator with a remote backend but no stored config (local-only)."""
    return PersistenceCoordinator(cache, config_store, remote)


@pytest.fixture
def synced_coordinator(coordinator, config_store, storage_config) -> PersistenceCoordinator:
    """Coordinator with the fake remote configured."""
    config_store.save(storage_config)
    return coordinator


@pytest.fixture
def service(coordinator) -> TrackerService:
    return TrackerService(coordinator)


@pytest.fixture
def legacy_raw() -> dict:
    """A document from before per-user catalogs."""
    return {
        "exercises": [
            {"id": "ex_1", "name": "Bench Press", "category": "Chest"},
            {"id": "ex_2", "name": "Squat", "category": "Legs"},
        ],
        "logs": [
            {
                "id": "log_1",
                "exerciseId": "ex_1",
                "user": "Adam",
                "date": "2024-01-01",
                "sets": [{"id": "s1", "weight": 80, "reps": 8, "timestamp": 1704100000000}],
            }
        ],
    }
