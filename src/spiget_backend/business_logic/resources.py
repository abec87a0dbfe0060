"""Business logic for catalog reads."""
import logging
import time
from typing import Any, Callable, Mapping, Optional, Type

import sqlalchemy.exc as sa_exc
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from spiget_backend.exceptions import (
    BadRequestException,
    DatabaseConnectionException,
    DatabaseQueryException,
    NotFoundException,
)
from spiget_backend.repositories import (
    AuthorRepository,
    ResourceRepository,
    ReviewRepository,
    UpdateRepository,
    VersionMatch,
    VersionRepository,
)
from spiget_backend.spigot import SpigotClient, SpigotError
from spiget_backend.utils.identifiers import resolve_identifier
from spiget_backend.utils.pagination import build_query, force_list, project
from spiget_types.authors import AUTHOR_ALL_FIELDS, AuthorGet
from spiget_types.base import CatalogModel, Page, ProjectionSpec
from spiget_types.resources import (
    RESOURCE_ALL_FIELDS,
    RESOURCE_LIST_FIELDS,
    RESOURCE_VERSION_MATCH_FIELDS,
    ResourceGet,
)
from spiget_types.reviews import REVIEW_ALL_FIELDS, ResourceReviewGet
from spiget_types.updates import UPDATE_ALL_FIELDS, ResourceUpdateGet
from spiget_types.versions import VERSION_ALL_FIELDS, ResourceVersionGet

logger = logging.getLogger(__name__)

PagedItems = tuple[list[dict[str, Any]], Page, ProjectionSpec]


async def run_query(operation: Callable[..., Any], *args) -> Any:
    """
    Run a blocking repository call in the threadpool.

    Store failures surface as 503 (pool exhausted) or 500, never as a hung request.
    """
    try:
        return await run_in_threadpool(operation, *args)
    except sa_exc.TimeoutError as e:
        raise DatabaseConnectionException(headers={"Retry-After": "2"}) from e
    except sa_exc.SQLAlchemyError as e:
        logger.error(f"Catalog query {getattr(operation, '__qualname__', operation)} failed: {e}", exc_info=True)
        raise DatabaseQueryException() from e


def serialize(entities: Any, dto: Type[CatalogModel], spec: ProjectionSpec) -> list[dict[str, Any]]:
    return [project(dto.model_validate(entity).to_wire(), spec) for entity in force_list(entities)]


async def _list_page(
    list_call: Callable[..., Page],
    dto: Type[CatalogModel],
    spec: ProjectionSpec,
    *args,
) -> PagedItems:
    page = await run_query(list_call, *args, spec)
    return serialize(page.items, dto, spec), page, spec


async def _require_resource(repository: ResourceRepository, resource_id: int):
    resource = await run_query(repository.get_by_id, resource_id)
    if resource is None:
        raise NotFoundException.of("resource")
    return resource


# ----------------------------------------------------------------------------
# Resource lists
# ----------------------------------------------------------------------------


async def list_resources(db: Session, params: Mapping[str, str], *criteria) -> PagedItems:
    repository = ResourceRepository(db)
    spec = build_query(params, RESOURCE_LIST_FIELDS, repository.sortable_fields())
    page = await run_query(repository.list, spec, *criteria)
    return serialize(page.items, ResourceGet, spec), page, spec


async def list_new_resources(db: Session, params: Mapping[str, str]) -> PagedItems:
    return await list_resources(db, params, ResourceRepository.new_criteria())


async def list_recently_updated_resources(
    db: Session,
    params: Mapping[str, str],
    now: Optional[int] = None,
) -> PagedItems:
    now = int(time.time()) if now is None else now
    return await list_resources(db, params, ResourceRepository.recently_updated_criteria(now))


async def list_resources_by_premium(db: Session, params: Mapping[str, str], premium: bool) -> PagedItems:
    return await list_resources(db, params, ResourceRepository.premium_criteria(premium))


async def match_tested_versions(
    db: Session,
    versions: str,
    method: str,
    params: Mapping[str, str],
) -> tuple[dict[str, Any], Page, ProjectionSpec]:
    """
    Resources whose testedVersions intersect (any) or contain (all) the
    comma-separated versions.
    """
    try:
        match = VersionMatch(method)
    except ValueError:
        raise BadRequestException(detail="Unknown method. Allowed: any, all")

    check = versions.split(",")
    repository = ResourceRepository(db)
    spec = build_query(params, RESOURCE_VERSION_MATCH_FIELDS, repository.sortable_fields())
    criteria = repository.tested_versions_criteria(check, match)
    page = await run_query(repository.list, spec, criteria)

    body = {
        "check": check,
        "method": match.value,
        "match": serialize(page.items, ResourceGet, spec),
    }
    return body, page, spec


# ----------------------------------------------------------------------------
# Single resource and related entities
# ----------------------------------------------------------------------------


async def fetch_upstream_fields(spigot: SpigotClient, resource_id: int) -> dict[str, Any]:
    """Upstream view of a resource in catalog wire names; empty when the upstream fails."""
    try:
        upstream = await spigot.get_resource(resource_id)
    except SpigotError as e:
        logger.info(f"Serving resource {resource_id} without upstream data: {e}")
        return {}
    return upstream.to_catalog_fields()


async def get_resource(
    db: Session,
    resource_id: int,
    params: Mapping[str, str],
    spigot: Optional[SpigotClient] = None,
) -> dict[str, Any]:
    spec = build_query(params, RESOURCE_ALL_FIELDS)
    resource = await _require_resource(ResourceRepository(db), resource_id)

    item = ResourceGet.model_validate(resource).to_wire()
    if spigot is not None:
        item.update(await fetch_upstream_fields(spigot, resource_id))
    return project(item, spec)


async def get_resource_author(db: Session, resource_id: int, params: Mapping[str, str]) -> dict[str, Any]:
    spec = build_query(params, AUTHOR_ALL_FIELDS)
    resource = await _require_resource(ResourceRepository(db), resource_id)

    author = None
    if resource.author_id is not None:
        author = await run_query(AuthorRepository(db).get_by_id, resource.author_id)
    if author is None:
        raise NotFoundException.of("author")
    return project(AuthorGet.model_validate(author).to_wire(), spec)


async def get_existing_resource(db: Session, resource_id: int):
    """Stored resource row, or NotFound."""
    return await _require_resource(ResourceRepository(db), resource_id)


async def list_resource_reviews(db: Session, resource_id: int, params: Mapping[str, str]) -> PagedItems:
    await _require_resource(ResourceRepository(db), resource_id)
    repository = ReviewRepository(db)
    spec = build_query(params, REVIEW_ALL_FIELDS, repository.sortable_fields())
    return await _list_page(repository.list_for_resource, ResourceReviewGet, spec, resource_id)


async def list_resource_updates(db: Session, resource_id: int, params: Mapping[str, str]) -> PagedItems:
    await _require_resource(ResourceRepository(db), resource_id)
    repository = UpdateRepository(db)
    spec = build_query(params, UPDATE_ALL_FIELDS, repository.sortable_fields())
    return await _list_page(repository.list_for_resource, ResourceUpdateGet, spec, resource_id)


async def list_resource_versions(db: Session, resource_id: int, params: Mapping[str, str]) -> PagedItems:
    await _require_resource(ResourceRepository(db), resource_id)
    repository = VersionRepository(db)
    spec = build_query(params, VERSION_ALL_FIELDS, repository.sortable_fields())
    return await _list_page(repository.list_for_resource, ResourceVersionGet, spec, resource_id)


async def get_resource_update(
    db: Session,
    resource_id: int,
    update: str,
    params: Mapping[str, str],
) -> dict[str, Any]:
    spec = build_query(params, UPDATE_ALL_FIELDS)
    found = await run_query(UpdateRepository(db).find, resource_id, resolve_identifier(update))
    if found is None:
        raise NotFoundException.of("update")
    return project(ResourceUpdateGet.model_validate(found).to_wire(), spec)


async def find_resource_version(db: Session, resource_id: int, version: str):
    """Resolve 'latest', a numeric id or a uuid token to a stored version row, or NotFound."""
    found = await run_query(VersionRepository(db).find, resource_id, resolve_identifier(version))
    if found is None:
        raise NotFoundException.of("version")
    return found


async def get_resource_version(
    db: Session,
    resource_id: int,
    version: str,
    params: Mapping[str, str],
) -> dict[str, Any]:
    spec = build_query(params, VERSION_ALL_FIELDS)
    found = await find_resource_version(db, resource_id, version)
    return project(ResourceVersionGet.model_validate(found).to_wire(), spec)
