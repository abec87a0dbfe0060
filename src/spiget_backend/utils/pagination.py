"""
Field projection and pagination for catalog list and lookup routes.

build_query() turns raw query parameters into a ProjectionSpec. It never
raises: malformed values fall back to defaults, and requested fields outside
the whitelist are dropped so clients can never pull arbitrary columns.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence

from fastapi import Response

from spiget_backend.settings import settings
from spiget_types.base import Page, ProjectionSpec, SortOrder


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_fields(raw: Optional[str], allowed_fields: Sequence[str]) -> list[str]:
    """
    Intersect a comma-separated field list with the whitelist.

    An empty selection means every allowed field. 'id' is always kept.
    """
    if not raw:
        return list(allowed_fields)

    requested = {f.strip() for f in raw.split(",") if f.strip()}
    fields = [f for f in allowed_fields if f in requested]
    if not fields:
        return list(allowed_fields)
    if "id" in allowed_fields and "id" not in fields:
        fields.insert(0, "id")
    return fields


def parse_sort(raw: Optional[str], sortable: Iterable[str]) -> tuple[Optional[str], SortOrder]:
    """'-name' sorts descending, 'name' or '+name' ascending; unknown fields are ignored."""
    if not raw:
        return None, SortOrder.ASC

    raw = raw.strip()
    order = SortOrder.ASC
    if raw[:1] == "-":
        order = SortOrder.DESC
        raw = raw[1:]
    elif raw[:1] == "+":
        raw = raw[1:]

    if raw not in set(sortable):
        return None, SortOrder.ASC
    return raw, order


def build_query(
    params: Mapping[str, str],
    allowed_fields: Sequence[str],
    sortable: Iterable[str] = (),
) -> ProjectionSpec:
    """
    Build the projection and page specification for one request.

    Args:
        params: Request query parameters (page, size/limit, sort, fields)
        allowed_fields: Whitelist of wire field names for the entity kind
        sortable: Wire field names the repository can order by

    Returns:
        ProjectionSpec with page >= 1 and 1 <= size <= PAGE_SIZE_MAX
    """
    page = _positive_int(params.get("page"), 1)
    size = _positive_int(params.get("size") or params.get("limit"), settings.PAGE_SIZE_DEFAULT)
    size = min(size, settings.PAGE_SIZE_MAX)
    sort_field, sort_order = parse_sort(params.get("sort"), sortable)

    return ProjectionSpec(
        page=page,
        size=size,
        sort_field=sort_field,
        sort_order=sort_order,
        fields=parse_fields(params.get("fields"), allowed_fields),
    )


def project(item: Mapping[str, Any], spec: ProjectionSpec) -> dict[str, Any]:
    """Keep only the projected wire fields of one serialized entity."""
    return {key: value for key, value in item.items() if key in spec.fields}


def force_list(items: Any) -> list:
    """A page is always an array, even when a single entity was returned."""
    if items is None:
        return []
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]


def apply_page_headers(response: Response, page: Page, spec: ProjectionSpec) -> None:
    """Publish page metadata alongside the JSON array body."""
    response.headers["X-Total-Count"] = str(page.total)
    response.headers["X-Page-Index"] = str(page.page)
    response.headers["X-Page-Size"] = str(page.size)
    response.headers["X-Page-Count"] = str(page.pages)
    if spec.sort_field:
        response.headers["X-Page-Sort"] = spec.sort_field
        response.headers["X-Page-Order"] = spec.sort_order.value
