"""
GitHub contents API backend for the remote document copy.

Implements:
- Reading the document file with its blob sha (the version token)
- Creating or updating the file with a commit

Unauthenticated requests are sent when no token is configured, which works
for public repositories (reads only, in practice).
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import get_settings
from ..exceptions import DecodeError, NotFoundError, RemoteError
from ..models.document import AppDocument, StorageConfig
from .base import RemoteFile
from .codec import encode_document


logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"


class GitHubContentsClient:
    """
    Client for the GitHub repository contents endpoint.

    Usage:
        async with GitHubContentsClient() as client:
            remote = await client.fetch_document(config)
            await client.put_document(config, document, sha=remote.sha)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        commit_message: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, defaults to the configured github_api_url
            commit_message: Message used for every document commit
            timeout: Request timeout in seconds for the owned HTTP client
            http_client: Existing client to use instead of creating one.
                         It is not closed by this object.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self.commit_message = commit_message or settings.commit_message
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client and self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "GitHubContentsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _url(self, config: StorageConfig) -> str:
        return f"{self.base_url}/repos/{config.contents_path}"

    @staticmethod
    def _headers(config: StorageConfig) -> Dict[str, str]:
        headers = {
            "Accept": GITHUB_ACCEPT,
            "Content-Type": "application/json",
        }
        if config.github_token:
            headers["Authorization"] = f"Bearer {config.github_token}"
        return headers

    async def _request(
        self,
        method: str,
        config: StorageConfig,
        json_data: Optional[Dict[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send a request to the contents endpoint of the configured file.

        Returns:
            Parsed JSON response body

        Raises:
            NotFoundError: On HTTP 404
            RemoteError: On any other non-2xx status or transport failure
            DecodeError: If a successful response is not JSON
        """
        headers = self._headers(config)
        if extra_headers:
            headers.update(extra_headers)

        client = await self._get_client()
        try:
            response = await client.request(
                method,
                self._url(config),
                headers=headers,
                json=json_data,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteError(f"GitHub request failed: {e}") from e
        except UnicodeEncodeError as e:
            # Header values must be ASCII; a pasted token can break that.
            raise RemoteError(f"GitHub request could not be built: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(config.contents_path, body=response.text)

        if not response.is_success:
            logger.error("GitHub API error %s: %s", response.status_code, response.text)
            raise RemoteError(
                f"GitHub API error: {response.status_code} - {response.reason_phrase}",
                status=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"GitHub response is not JSON: {e}", source="remote") from e

    async def fetch_document(self, config: StorageConfig) -> RemoteFile:
        """Read the document file and its current sha."""
        data = await self._request(
            "GET",
            config,
            extra_headers={"Cache-Control": "no-cache"},
        )
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            raise DecodeError("GitHub response has no file content", source="remote")
        return RemoteFile(content=data["content"], sha=str(data.get("sha") or ""))

    async def put_document(
        self,
        config: StorageConfig,
        document: AppDocument,
        sha: Optional[str] = None,
    ) -> None:
        """Commit the full document, as an update when sha is given."""
        body: Dict[str, Any] = {
            "message": self.commit_message,
            "content": encode_document(document),
        }
        if sha:
            body["sha"] = sha
        await self._request("PUT", config, json_data=body)
        logger.info("Pushed document to %s/%s:%s", config.owner, config.repo, config.path)
