"""Business logic for update request intake."""
import logging
import time

from sqlalchemy.orm import Session

from spiget_backend.business_logic.resources import run_query
from spiget_backend.exceptions import BadRequestException, DuplicateRequestException
from spiget_backend.model.update_request import UpdateRequest
from spiget_backend.repositories import UpdateRequestRepository
from spiget_types.update_requests import UpdateRequestAccepted, UpdateRequestCreate

logger = logging.getLogger(__name__)

RESOURCE_REQUEST_TYPE = "resource"


def _submit(db: Session, resource_id: int, facets: dict[str, bool]) -> UpdateRequest:
    repository = UpdateRequestRepository(db)
    if repository.find_pending(RESOURCE_REQUEST_TYPE, resource_id) is not None:
        raise DuplicateRequestException(
            detail="Duplicate Update Request",
            context={"type": RESOURCE_REQUEST_TYPE, "requested_id": resource_id},
        )

    return repository.create(UpdateRequest(
        type=RESOURCE_REQUEST_TYPE,
        requested_id=resource_id,
        requested=int(time.time() * 1000),
        **facets,
    ))


async def request_resource_update(
    db: Session,
    resource_id: int,
    payload: UpdateRequestCreate | None,
) -> UpdateRequestAccepted:
    """
    Queue a re-sync of one resource for the ingestion pipeline.

    Raises:
        BadRequestException: resource_id is not positive
        DuplicateRequestException: A request for the same resource is pending
    """
    if resource_id <= 0:
        raise BadRequestException(detail="Invalid resource id", context={"resource_id": resource_id})

    facets = (payload or UpdateRequestCreate()).facets()
    await run_query(_submit, db, resource_id, facets)

    logger.info(f"Update requested for resource {resource_id}: {facets}")
    return UpdateRequestAccepted(resource=resource_id, **facets)
