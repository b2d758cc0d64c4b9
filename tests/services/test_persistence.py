"""Tests for PersistenceCoordinator load/save and its fallback chain."""

import base64

import httpx
import pytest

from lift_tracker.db.local_cache import DOCUMENT_KEY
from lift_tracker.exceptions import DecodeError, RemoteError
from lift_tracker.integrations.github import GitHubContentsClient
from lift_tracker.models.document import Exercise, StorageConfig, User, WorkoutLog, WorkoutSet, seed_document
from lift_tracker.services.persistence import (
    DocumentSource,
    PersistenceCoordinator,
    SYNC_FAILED_NOTICE,
    SyncStatus,
)


def sample_document():
    document = seed_document()
    document.logs.append(
        WorkoutLog(
            id="log_1",
            exercise_id="adam_ex_2",
            user=User.ADAM,
            date="2024-01-01",
            sets=[WorkoutSet(id="set_1", weight=100, reps=5, timestamp=1704067200000)],
        )
    )
    return document


class TestLoadFallbackChain:
    """load() degrades remote -> local -> seed."""

    @pytest.mark.asyncio
    async def test_seed_when_nothing_stored(self, coordinator, cache):
        """No config and no local data gives the seed: 4 exercises each, no logs."""
        document = await coordinator.load()

        assert len(document.adam_exercises) == 4
        assert len(document.elia_exercises) == 4
        assert document.logs == []
        assert coordinator.cached_document is document
        assert coordinator.last_source == DocumentSource.SEED

    @pytest.mark.asyncio
    async def test_seed_is_not_persisted(self, coordinator, cache):
        await coordinator.load()

        assert cache.get_item(DOCUMENT_KEY) is None

    @pytest.mark.asyncio
    async def test_seed_ids_are_namespaced(self, coordinator):
        document = await coordinator.load()

        assert all(e.id.startswith("adam_") for e in document.adam_exercises)
        assert all(e.id.startswith("elia_") for e in document.elia_exercises)

    @pytest.mark.asyncio
    async def test_seed_is_fresh_each_time(self, coordinator):
        """Mutating a loaded seed does not leak into the next seed."""
        first = await coordinator.load()
        first.adam_exercises.clear()

        second = await coordinator.load()

        assert len(second.adam_exercises) == 4

    @pytest.mark.asyncio
    async def test_local_used_without_config(self, coordinator, cache):
        cache.write_json(DOCUMENT_KEY, sample_document().to_dict())

        document = await coordinator.load()

        assert document == sample_document()
        assert coordinator.last_source == DocumentSource.LOCAL

    @pytest.mark.asyncio
    async def test_local_legacy_document_migrated(self, coordinator, cache, legacy_raw):
        cache.write_json(DOCUMENT_KEY, legacy_raw)

        document = await coordinator.load()

        assert [e.id for e in document.elia_exercises] == ["elia_ex_1", "elia_ex_2"]

    @pytest.mark.asyncio
    async def test_corrupt_local_falls_back_to_seed(self, coordinator, cache):
        cache.set_item(DOCUMENT_KEY, "{broken")

        document = await coordinator.load()

        assert document == seed_document()

    @pytest.mark.asyncio
    async def test_remote_preferred_and_mirrored(self, synced_coordinator, cache, remote):
        """A readable remote copy wins over local data and is mirrored locally."""
        cache.write_json(DOCUMENT_KEY, seed_document().to_dict())
        remote.seed(sample_document().to_dict())

        document = await synced_coordinator.load()

        assert document == sample_document()
        assert synced_coordinator.last_source == DocumentSource.REMOTE
        assert cache.read_json(DOCUMENT_KEY) == sample_document().to_dict()

    @pytest.mark.asyncio
    async def test_remote_legacy_document_migrated(self, synced_coordinator, remote, legacy_raw):
        remote.seed(legacy_raw)

        document = await synced_coordinator.load()

        assert [e.id for e in document.adam_exercises] == ["adam_ex_1", "adam_ex_2"]

    @pytest.mark.asyncio
    async def test_remote_missing_falls_back_to_local(self, synced_coordinator, cache):
        cache.write_json(DOCUMENT_KEY, sample_document().to_dict())

        document = await synced_coordinator.load()

        assert document == sample_document()
        assert synced_coordinator.last_source == DocumentSource.LOCAL

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [RemoteError("boom", status=500, body="oops"), DecodeError("bad base64", source="remote")],
    )
    async def test_remote_failure_falls_back_to_local(self, synced_coordinator, cache, remote, error):
        cache.write_json(DOCUMENT_KEY, sample_document().to_dict())
        remote.fail_fetch = error

        document = await synced_coordinator.load()

        assert document == sample_document()

    @pytest.mark.asyncio
    async def test_undecodable_remote_content_falls_back(self, synced_coordinator, cache, remote):
        remote.content = "@@not-base64@@"
        remote.sha = "sha-x"

        document = await synced_coordinator.load()

        assert document == seed_document()
        assert synced_coordinator.last_source == DocumentSource.SEED

    @pytest.mark.asyncio
    async def test_unexpected_remote_exception_falls_back(self, synced_coordinator, cache, remote):
        """Errors outside the remote error types still degrade to local data."""
        cache.write_json(DOCUMENT_KEY, sample_document().to_dict())
        remote.fail_fetch = RuntimeError("event loop closed")

        document = await synced_coordinator.load()

        assert document == sample_document()
        assert synced_coordinator.last_source == DocumentSource.LOCAL

    @pytest.mark.asyncio
    async def test_non_ascii_token_falls_back_to_seed(self, cache, config_store):
        """A token that cannot be sent as a header is a failed request, not a crash."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"content": "", "sha": "s"})

        config_store.save(StorageConfig(owner="adam", repo="lifts", path="t.json", github_token="t\u00f6k\u00e9n"))
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = GitHubContentsClient(base_url="https://api.github.test", http_client=http_client)
        coordinator = PersistenceCoordinator(cache, config_store, client)

        document = await coordinator.load()
        result = await coordinator.save(document)
        await http_client.aclose()

        assert document == seed_document()
        assert coordinator.last_source == DocumentSource.SEED
        assert result.status == SyncStatus.SYNC_FAILED
        assert cache.read_json(DOCUMENT_KEY) == seed_document().to_dict()
        assert calls == []

    @pytest.mark.asyncio
    async def test_deeply_nested_local_document_falls_back_to_seed(self, coordinator, cache):
        cache.set_item(DOCUMENT_KEY, "[" * 200000 + "]" * 200000)

        document = await coordinator.load()

        assert document == seed_document()
        assert coordinator.last_source == DocumentSource.SEED

    @pytest.mark.asyncio
    async def test_deeply_nested_remote_document_falls_back(self, synced_coordinator, cache, remote):
        cache.write_json(DOCUMENT_KEY, sample_document().to_dict())
        remote.content = base64.b64encode(b"[" * 200000 + b"]" * 200000).decode("ascii")
        remote.sha = "sha-deep"

        document = await synced_coordinator.load()

        assert document == sample_document()
        assert synced_coordinator.last_source == DocumentSource.LOCAL

    @pytest.mark.asyncio
    async def test_config_ignored_without_backend(self, cache, config_store, storage_config):
        config_store.save(storage_config)
        coordinator = PersistenceCoordinator(cache, config_store, remote=None)

        result = await coordinator.save(sample_document())

        assert result.status == SyncStatus.LOCAL_ONLY
        assert await coordinator.load() == sample_document()


class TestSave:
    """save() writes locally first, then best-effort remote."""

    @pytest.mark.asyncio
    async def test_round_trip_local_only(self, coordinator):
        """save(d); load() == d without a remote store."""
        document = sample_document()

        result = await coordinator.save(document)

        assert result.status == SyncStatus.LOCAL_ONLY
        assert result.notice is None
        assert await coordinator.load() == document

    @pytest.mark.asyncio
    async def test_round_trip_with_remote(self, synced_coordinator, remote):
        """save(d); load() == d with a reachable remote store."""
        document = sample_document()

        result = await synced_coordinator.save(document)

        assert result.synced
        assert await synced_coordinator.load() == document
        assert synced_coordinator.last_source == DocumentSource.REMOTE

    @pytest.mark.asyncio
    async def test_first_write_has_no_sha(self, synced_coordinator, remote):
        await synced_coordinator.save(sample_document())

        assert remote.puts[0]["sha"] is None

    @pytest.mark.asyncio
    async def test_update_uses_current_sha(self, synced_coordinator, remote):
        remote.seed(seed_document().to_dict())
        current_sha = remote.sha

        result = await synced_coordinator.save(sample_document())

        assert result.synced
        assert remote.puts[0]["sha"] == current_sha
        assert remote.stored == sample_document().to_dict()

    @pytest.mark.asyncio
    async def test_remote_put_failure_keeps_local(self, synced_coordinator, cache, remote):
        """A failed push reports a notice and never rolls back the local write."""
        remote.fail_put = RemoteError("GitHub API error: 403 - Forbidden", status=403)

        result = await synced_coordinator.save(sample_document())

        assert result.status == SyncStatus.SYNC_FAILED
        assert result.notice == SYNC_FAILED_NOTICE
        assert "403" in result.reason
        assert cache.read_json(DOCUMENT_KEY) == sample_document().to_dict()
        assert synced_coordinator.cached_document == sample_document()

    @pytest.mark.asyncio
    async def test_sha_lookup_failure_still_attempts_put(self, synced_coordinator, remote):
        """An unreadable current version is tolerated; the put proceeds without a sha."""
        remote.fail_fetch = RemoteError("timeout")

        result = await synced_coordinator.save(sample_document())

        assert result.synced
        assert remote.puts[0]["sha"] is None

    @pytest.mark.asyncio
    async def test_unexpected_remote_exception_is_absorbed(self, synced_coordinator, remote):
        remote.fail_put = RuntimeError("event loop closed")

        result = await synced_coordinator.save(sample_document())

        assert result.status == SyncStatus.SYNC_FAILED
        assert result.reason == "event loop closed"

    @pytest.mark.asyncio
    async def test_save_updates_cached_document(self, coordinator):
        document = sample_document()
        document.adam_exercises.append(Exercise(id="adam_x", name="Dip", category="Chest"))

        await coordinator.save(document)

        assert coordinator.cached_document is document
