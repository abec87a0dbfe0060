"""
Async HTTP client for the SpigotMC upstream.

Two kinds of calls go upstream: resource lookups on the simple API, used to
enrich catalog records, and version downloads, streamed through by the
master node's proxy route.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from spiget_backend.settings import BackendSettings, settings as default_settings
from .exceptions import (
    SpigotAPIError,
    SpigotConnectionError,
    SpigotResourceNotFoundError,
    SpigotTimeoutError,
)
from .schemas import SpigotResource

logger = logging.getLogger(__name__)


class SpigotClient:
    """
    Async client for the SpigotMC site and simple API.

    Every request carries this instance's User-Agent.
    """

    def __init__(
        self,
        settings: Optional[BackendSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            settings: Optional settings; defaults to the process settings.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.settings = settings or default_settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "SpigotClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.settings.USER_AGENT},
                timeout=httpx.Timeout(self.settings.UPSTREAM_TIMEOUT),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def download_url(self, resource_id: int, version_id: int) -> str:
        return f"{self.settings.SPIGOT_URL}/resources/{resource_id}/download?version={version_id}"

    async def get_resource(self, resource_id: int) -> SpigotResource:
        """
        Fetch a resource from the simple API.

        Raises:
            SpigotResourceNotFoundError: If the upstream has no such resource
            SpigotTimeoutError: If the call exceeds UPSTREAM_TIMEOUT
            SpigotConnectionError: If the upstream cannot be reached
            SpigotAPIError: On error statuses or unreadable payloads
        """
        client = await self._ensure_client()

        try:
            resp = await client.get(
                self.settings.SPIGOT_API_URL,
                params={"action": "getResource", "id": resource_id},
            )
        except httpx.TimeoutException:
            raise SpigotTimeoutError("getResource", self.settings.UPSTREAM_TIMEOUT)
        except httpx.HTTPError as e:
            raise SpigotConnectionError(detail=str(e))

        if resp.status_code != 200:
            raise SpigotAPIError("Failed to get resource", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise SpigotAPIError("Invalid JSON from simple API", detail=str(e))

        # The simple API answers unknown ids with null or an error object
        if data is None or (isinstance(data, dict) and "error" in data):
            raise SpigotResourceNotFoundError(resource_id)
        if not isinstance(data, dict):
            raise SpigotAPIError("Unexpected resource payload", detail=f"expected an object, got {type(data).__name__}")

        try:
            return SpigotResource.model_validate(data)
        except ValidationError as e:
            raise SpigotAPIError("Unexpected resource payload", detail=str(e))

    async def open_download(self, resource_id: int, version_id: int) -> httpx.Response:
        """
        Start streaming a version download.

        The caller owns the returned response and must close it
        (``await response.aclose()``) once the body has been relayed.

        Raises:
            SpigotTimeoutError: If connecting or the first byte exceeds PROXY_TIMEOUT
            SpigotConnectionError: If the upstream cannot be reached
        """
        client = await self._ensure_client()
        url = self.download_url(resource_id, version_id)
        request = client.build_request(
            "GET",
            url,
            timeout=httpx.Timeout(self.settings.PROXY_TIMEOUT),
        )

        try:
            resp = await client.send(request, stream=True, follow_redirects=True)
        except httpx.TimeoutException:
            raise SpigotTimeoutError("download", self.settings.PROXY_TIMEOUT)
        except httpx.HTTPError as e:
            raise SpigotConnectionError(detail=str(e))

        logger.info(f"{resp.status_code} {url}")
        return resp


_client: Optional[SpigotClient] = None


def get_spigot_client() -> SpigotClient:
    """FastAPI dependency returning the shared upstream client."""
    global _client
    if _client is None:
        _client = SpigotClient()
    return _client


async def close_spigot_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
