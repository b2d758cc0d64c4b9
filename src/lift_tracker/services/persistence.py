"""
Persistence coordinator for the tracker document.

Reconciles three copies of the same document:
- the in-memory cached document held by the coordinator
- the local SQLite cache (always written, always readable)
- the optional remote GitHub copy (read first, written best effort)

load() degrades remote -> local -> seed and never raises. save() writes
locally first and reports the remote outcome in a SaveResult instead of
raising, so a failed sync never loses or rolls back local data.
"""

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..db.config_store import ConfigStore
from ..db.local_cache import DOCUMENT_KEY, LocalCache
from ..db.migrations import normalize
from ..exceptions import DecodeError, LiftTrackerError, NotFoundError, RemoteError
from ..integrations.base import RemoteDocumentBackend
from ..integrations.codec import decode_content
from ..models.document import AppDocument, StorageConfig, seed_document


logger = logging.getLogger(__name__)

SYNC_FAILED_NOTICE = "Changes saved locally, but failed to sync to GitHub. Check your settings."


class SyncStatus(str, Enum):
    """Outcome of the remote leg of a save."""
    SYNCED = "synced"
    LOCAL_ONLY = "local_only"    # no remote store configured
    SYNC_FAILED = "sync_failed"  # saved locally, remote write failed


class DocumentSource(str, Enum):
    """Where the cached document came from on the last load."""
    REMOTE = "remote"
    LOCAL = "local"
    SEED = "seed"


@dataclass
class SaveResult:
    """Result of a save. The local write has always succeeded when this exists."""
    status: SyncStatus
    reason: Optional[str] = None

    @property
    def synced(self) -> bool:
        return self.status == SyncStatus.SYNCED

    @property
    def notice(self) -> Optional[str]:
        """User-facing message when the remote leg failed, else None."""
        if self.status == SyncStatus.SYNC_FAILED:
            return SYNC_FAILED_NOTICE
        return None


class PersistenceCoordinator:
    """
    Owns the single live document and its load/save cycle.

    Construct one per process and pass it to the services that need it.
    There is no lock: two load-mutate-save cycles running concurrently both
    save, and the later save wins.
    """

    def __init__(
        self,
        cache: LocalCache,
        config_store: ConfigStore,
        remote: Optional[RemoteDocumentBackend] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            cache: Local durable cache for the document
            config_store: Source of the remote StorageConfig
            remote: Remote backend; None keeps the tracker local-only even
                    when a config is stored
        """
        self.cache = cache
        self.config_store = config_store
        self.remote = remote
        self.cached_document: Optional[AppDocument] = None
        self.last_source: Optional[DocumentSource] = None

    def _remote_config(self) -> Optional[StorageConfig]:
        if self.remote is None:
            return None
        return self.config_store.get()

    async def _load_remote(self, config: StorageConfig) -> Optional[AppDocument]:
        try:
            remote_file = await self.remote.fetch_document(config)
            raw = decode_content(remote_file.content)
        except NotFoundError:
            logger.info("No remote document at %s yet, using local data", config.contents_path)
            return None
        except (RemoteError, DecodeError) as e:
            logger.warning("Failed to load from GitHub, falling back to local cache: %s", e.message)
            return None
        except Exception as e:
            logger.warning("Unexpected error loading from GitHub, falling back to local cache: %s", e)
            return None
        return normalize(raw)

    def _load_local(self) -> Optional[AppDocument]:
        try:
            raw = self.cache.read_json(DOCUMENT_KEY)
        except DecodeError as e:
            logger.warning("Local document is unreadable, ignoring it: %s", e.message)
            return None
        except sqlite3.Error as e:
            logger.error("Local cache read failed: %s", e)
            return None
        if raw is None:
            return None
        return normalize(raw)

    async def load(self) -> AppDocument:
        """
        Load the authoritative document.

        Returns:
            The remote copy if configured and readable (mirrored into the
            local cache), else the local copy, else a fresh seed document
            that is not persisted until the next save.
        """
        config = self._remote_config()
        if config is not None:
            document = await self._load_remote(config)
            if document is not None:
                self.cached_document = document
                self.last_source = DocumentSource.REMOTE
                try:
                    self.cache.write_json(DOCUMENT_KEY, document.to_dict())
                except sqlite3.Error as e:
                    logger.error("Could not mirror remote document locally: %s", e)
                return document

        document = self._load_local()
        if document is not None:
            self.cached_document = document
            self.last_source = DocumentSource.LOCAL
            return document

        logger.info("No stored document found, starting from seed data")
        document = seed_document()
        self.cached_document = document
        self.last_source = DocumentSource.SEED
        return document

    async def save(self, document: AppDocument) -> SaveResult:
        """
        Persist the document locally, then push it to the remote store.

        The local write happens first and its errors propagate. Remote
        failures are logged and reported in the result, never raised.
        """
        self.cached_document = document
        self.cache.write_json(DOCUMENT_KEY, document.to_dict())

        config = self._remote_config()
        if config is None:
            return SaveResult(SyncStatus.LOCAL_ONLY)

        try:
            sha = await self._current_sha(config)
            await self.remote.put_document(config, document, sha=sha)
        except Exception as e:
            reason = e.message if isinstance(e, LiftTrackerError) else str(e)
            logger.error("Failed to sync to GitHub: %s", reason)
            return SaveResult(SyncStatus.SYNC_FAILED, reason=reason)

        return SaveResult(SyncStatus.SYNCED)

    async def _current_sha(self, config: StorageConfig) -> Optional[str]:
        """Version token of the remote file, or None when it does not exist."""
        try:
            remote_file = await self.remote.fetch_document(config)
        except NotFoundError:
            logger.debug("Remote document does not exist yet, creating it")
            return None
        except (RemoteError, DecodeError) as e:
            logger.warning("Could not read current remote version, writing without it: %s", e.message)
            return None
        except Exception as e:
            logger.warning("Could not read current remote version, writing without it: %s", e)
            return None
        return remote_file.sha or None
