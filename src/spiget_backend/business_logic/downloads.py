"""
Download resolution and the master-only download proxy.

A resource file is served from one of two places: the author's external site
or the catalog CDN. Version files only live on the upstream marketplace, so
they are either redirected to it or, on the master node, streamed through.
"""
import logging
from enum import Enum

from fastapi.responses import RedirectResponse, StreamingResponse
from starlette.background import BackgroundTask

from spiget_backend.exceptions import InvalidStateException, UpstreamUnavailableException
from spiget_backend.settings import BackendSettings
from spiget_backend.spigot import SpigotClient, SpigotError

logger = logging.getLogger(__name__)

FILE_SOURCE_HEADER = "X-Spiget-File-Source"
PROXY_CACHE_CONTROL = "public, max-age=604800, immutable"
RELAYED_HEADERS = ("Content-Disposition",)


class FileSource(str, Enum):
    EXTERNAL = "external"
    CDN = "cdn"


def resolve_file_location(resource, settings: BackendSettings) -> tuple[FileSource, str]:
    """
    Decide where a resource file is downloaded from.

    Raises:
        InvalidStateException: External resource without an external URL
    """
    if resource.external:
        if resource.file_external_url:
            return FileSource.EXTERNAL, resource.file_external_url
        raise InvalidStateException(
            detail="cannot download external resource",
            context={"resource_id": resource.id},
        )
    return FileSource.CDN, f"{settings.CDN_URL.rstrip('/')}/{resource.id}{resource.file_type or ''}"


def redirect_to_file(resource, settings: BackendSettings) -> RedirectResponse:
    source, location = resolve_file_location(resource, settings)
    return RedirectResponse(
        url=location,
        status_code=302,
        headers={FILE_SOURCE_HEADER: source.value},
    )


def redirect_to_version_download(resource_id: int, version_id: int, spigot: SpigotClient) -> RedirectResponse:
    return RedirectResponse(url=spigot.download_url(resource_id, version_id), status_code=302)


async def proxy_version_download(resource_id: int, version_id: int, spigot: SpigotClient) -> StreamingResponse:
    """
    Stream a version file from the upstream to the caller.

    The upstream status is relayed as-is, including error statuses. Only
    transport failures become a 502.
    """
    logger.info(f"Proxying download of resource {resource_id} version {version_id}")
    try:
        upstream = await spigot.open_download(resource_id, version_id)
    except SpigotError as e:
        logger.warning(f"Download proxy for resource {resource_id} version {version_id} failed: {e}")
        raise UpstreamUnavailableException(
            detail="Failed to download file from upstream",
            context={"resource_id": resource_id, "version_id": version_id},
        ) from e

    headers = {"Cache-Control": PROXY_CACHE_CONTROL}
    for name in RELAYED_HEADERS:
        if name in upstream.headers:
            headers[name] = upstream.headers[name]

    return StreamingResponse(
        upstream.aiter_bytes(),
        status_code=upstream.status_code,
        headers=headers,
        media_type=upstream.headers.get("Content-Type", "application/octet-stream"),
        background=BackgroundTask(upstream.aclose),
    )
