"""Remote document stores."""

from .base import RemoteDocumentBackend, RemoteFile
from .codec import decode_content, encode_document
from .github import GitHubContentsClient

__all__ = [
    "GitHubContentsClient",
    "RemoteDocumentBackend",
    "RemoteFile",
    "decode_content",
    "encode_document",
]
