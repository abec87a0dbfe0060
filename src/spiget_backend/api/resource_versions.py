from fastapi import APIRouter, Depends, Response
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from spiget_backend.api.resources import query_params
from spiget_backend.business_logic.downloads import proxy_version_download, redirect_to_version_download
from spiget_backend.business_logic.resources import (
    find_resource_version,
    get_resource_version,
    list_resource_versions,
)
from spiget_backend.database import get_db, get_read_db
from spiget_backend.dependencies import require_master
from spiget_backend.spigot import SpigotClient, get_spigot_client
from spiget_backend.utils.pagination import apply_page_headers

resource_version_router = APIRouter(prefix="/resources", tags=["versions"])


@resource_version_router.get("/{resource_id:int}/versions")
async def list_versions(
    resource_id: int,
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resource_versions(db, resource_id, params)
    apply_page_headers(response, page, spec)
    return items


@resource_version_router.get("/{resource_id:int}/versions/{version}")
async def get_version(
    resource_id: int,
    version: str,
    params: dict = Depends(query_params),
    db: Session = Depends(get_read_db),
) -> dict:
    """A single version by id, uuid token, or 'latest'."""
    return await get_resource_version(db, resource_id, version, params)


@resource_version_router.get("/{resource_id:int}/versions/{version}/download")
async def download_version(
    resource_id: int,
    version: str,
    db: Session = Depends(get_read_db),
    spigot: SpigotClient = Depends(get_spigot_client),
) -> Response:
    """Redirect to the version download on the marketplace."""
    found = await find_resource_version(db, resource_id, version)
    return redirect_to_version_download(resource_id, found.id, spigot)


@resource_version_router.get(
    "/{resource_id:int}/versions/{version}/download/proxy",
    dependencies=[Depends(require_master)],
)
async def proxy_version(
    resource_id: int,
    version: str,
    db: Session = Depends(get_read_db),
    spigot: SpigotClient = Depends(get_spigot_client),
) -> StreamingResponse:
    """Stream the version file through this node. Master only."""
    found = await find_resource_version(db, resource_id, version)
    return await proxy_version_download(resource_id, found.id, spigot)
