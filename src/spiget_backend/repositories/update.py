from typing import Optional

from sqlalchemy.orm import Session

from spiget_types.base import Page, ProjectionSpec
from .base import CatalogRepository
from ..model.resource import ResourceUpdate
from ..utils.identifiers import IdentifierMode, ResolvedIdentifier


class UpdateRepository(CatalogRepository[ResourceUpdate]):

    SORT_COLUMNS = {
        "id": ResourceUpdate.id,
        "date": ResourceUpdate.date,
        "likes": ResourceUpdate.likes,
    }

    def __init__(self, db: Session):
        super().__init__(db, ResourceUpdate)

    def list_for_resource(self, resource_id: int, spec: ProjectionSpec) -> Page:
        return self.list(spec, ResourceUpdate.resource_id == resource_id)

    def find(self, resource_id: int, identifier: ResolvedIdentifier) -> Optional[ResourceUpdate]:
        """Newest by date for LATEST; updates carry no token, so BY_TOKEN never matches."""
        query = self.query().filter(ResourceUpdate.resource_id == resource_id)

        if identifier.mode is IdentifierMode.LATEST:
            return query.order_by(ResourceUpdate.date.desc(), ResourceUpdate.id.desc()).first()

        update_id = identifier.numeric_id
        if update_id is None:
            return None
        return query.filter(ResourceUpdate.id == update_id).first()
