"""
Base interface for remote document stores.

The persistence coordinator only needs two capabilities: read the remote
document file with its version token, and write a new version of it.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from ..models.document import AppDocument, StorageConfig


@dataclass
class RemoteFile:
    """A remote document file as returned by the store."""
    content: str  # base64 text, may contain line breaks
    sha: str  # version token required to overwrite the file


@runtime_checkable
class RemoteDocumentBackend(Protocol):
    """Protocol for a version-tokened remote file store."""

    async def fetch_document(self, config: StorageConfig) -> RemoteFile:
        """
        Read the document file.

        Raises:
            NotFoundError: If the file does not exist yet
            RemoteError: On any other failure
        """
        ...

    async def put_document(
        self,
        config: StorageConfig,
        document: AppDocument,
        sha: Optional[str] = None,
    ) -> None:
        """
        Create or overwrite the document file.

        sha must be the current version token when the file exists and
        None when creating it; a stale or missing token fails the write.

        Raises:
            RemoteError: If the write is rejected or cannot be sent
        """
        ...
