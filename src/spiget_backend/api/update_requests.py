from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from spiget_backend.business_logic.update_requests import request_resource_update
from spiget_backend.database import get_db
from spiget_backend.dependencies import require_master
from spiget_types.update_requests import UpdateRequestAccepted, UpdateRequestCreate

update_request_router = APIRouter(prefix="/resources", tags=["update requests"])


async def read_update_request(request: Request) -> Optional[UpdateRequestCreate]:
    """
    Parse the optional request body.

    Read by the endpoint itself so that a mirror redirects before it ever
    looks at the body.
    """
    body = await request.body()
    if not body.strip():
        return None
    try:
        return UpdateRequestCreate.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
        ) from e


@update_request_router.post(
    "/{resource_id:int}/requestUpdate",
    response_model=UpdateRequestAccepted,
    dependencies=[Depends(require_master)],
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": UpdateRequestCreate.model_json_schema()}},
        }
    },
)
async def request_update(
    resource_id: int,
    request: Request,
    db: Session = Depends(get_db),
) -> UpdateRequestAccepted:
    """Ask the ingestion pipeline to re-sync a resource. Master only."""
    payload = await read_update_request(request)
    return await request_resource_update(db, resource_id, payload)
