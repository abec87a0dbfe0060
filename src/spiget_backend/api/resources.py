from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from spiget_backend.business_logic.downloads import redirect_to_file
from spiget_backend.business_logic.icons import icon_response
from spiget_backend.business_logic.resources import (
    get_existing_resource,
    get_resource,
    get_resource_author,
    get_resource_update,
    list_new_resources,
    list_recently_updated_resources,
    list_resource_reviews,
    list_resource_updates,
    list_resources,
    list_resources_by_premium,
    match_tested_versions,
)
from spiget_backend.database import get_db, get_read_db
from spiget_backend.settings import BackendSettings, get_settings
from spiget_backend.spigot import SpigotClient, get_spigot_client
from spiget_backend.utils.pagination import apply_page_headers
from spiget_types.resources import IconType

resource_router = APIRouter(prefix="/resources", tags=["resources"])


def query_params(request: Request) -> dict[str, str]:
    """Raw query parameters; paging, sort and field projection are parsed leniently downstream."""
    return dict(request.query_params)


# Lists


@resource_router.get("")
async def list_all_resources(
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resources(db, params)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/new")
async def list_new(
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    """Resources that were never updated after their first release."""
    items, page, spec = await list_new_resources(db, params)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/recentUpdates")
async def list_recent_updates(
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    """Resources updated within the last two hours."""
    items, page, spec = await list_recently_updated_resources(db, params)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/premium")
async def list_premium(
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resources_by_premium(db, params, premium=True)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/free")
async def list_free(
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resources_by_premium(db, params, premium=False)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/for/{versions}")
async def list_for_versions(
    versions: str,
    response: Response,
    method: str = Query("any"),
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> dict:
    """Resources tested against any or all of the comma-separated game versions."""
    body, page, spec = await match_tested_versions(db, versions, method, params)
    apply_page_headers(response, page, spec)
    return body


# Single resource


@resource_router.get("/{resource_id:int}")
async def get_single_resource(
    resource_id: int,
    params: dict = Depends(query_params),
    db: Session = Depends(get_read_db),
    spigot: SpigotClient = Depends(get_spigot_client),
) -> dict:
    return await get_resource(db, resource_id, params, spigot)


@resource_router.get("/{resource_id:int}/go")
async def go_to_resource(
    resource_id: int,
    db: Session = Depends(get_read_db),
    settings: BackendSettings = Depends(get_settings),
) -> Response:
    """Redirect to the resource page on the marketplace."""
    resource = await get_existing_resource(db, resource_id)
    return RedirectResponse(url=f"{settings.SPIGOT_URL.rstrip('/')}/resources/{resource.id}?ref=spiget", status_code=302)


@resource_router.get("/{resource_id:int}/author")
async def get_author_of_resource(
    resource_id: int,
    params: dict = Depends(query_params),
    db: Session = Depends(get_read_db),
) -> dict:
    return await get_resource_author(db, resource_id, params)


@resource_router.get("/{resource_id:int}/icon")
@resource_router.get("/{resource_id:int}/icon/{icon_type}")
async def get_resource_icon(
    resource_id: int,
    icon_type: IconType = IconType.RAW,
    db: Session = Depends(get_read_db),
    settings: BackendSettings = Depends(get_settings),
) -> Response:
    resource = await get_existing_resource(db, resource_id)
    return icon_response(resource, icon_type, settings)


@resource_router.get("/{resource_id:int}/download")
async def download_resource(
    resource_id: int,
    db: Session = Depends(get_read_db),
    settings: BackendSettings = Depends(get_settings),
) -> Response:
    """Redirect to the resource file, on the author's site or the CDN."""
    resource = await get_existing_resource(db, resource_id)
    return redirect_to_file(resource, settings)


# Reviews and updates


@resource_router.get("/{resource_id:int}/reviews")
async def list_reviews(
    resource_id: int,
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resource_reviews(db, resource_id, params)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/{resource_id:int}/updates")
async def list_updates(
    resource_id: int,
    response: Response,
    params: dict = Depends(query_params),
    db: Session = Depends(get_db),
) -> list[dict]:
    items, page, spec = await list_resource_updates(db, resource_id, params)
    apply_page_headers(response, page, spec)
    return items


@resource_router.get("/{resource_id:int}/updates/{update}")
async def get_update(
    resource_id: int,
    update: str,
    params: dict = Depends(query_params),
    db: Session = Depends(get_read_db),
) -> dict:
    """A single update by id, or 'latest'."""
    return await get_resource_update(db, resource_id, update, params)
