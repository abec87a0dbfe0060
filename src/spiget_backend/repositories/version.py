from typing import Optional

from sqlalchemy.orm import Session

from spiget_types.base import Page, ProjectionSpec
from .base import CatalogRepository
from ..model.resource import ResourceVersion
from ..utils.identifiers import IdentifierMode, ResolvedIdentifier


class VersionRepository(CatalogRepository[ResourceVersion]):

    SORT_COLUMNS = {
        "id": ResourceVersion.id,
        "name": ResourceVersion.name,
        "releaseDate": ResourceVersion.release_date,
        "downloads": ResourceVersion.downloads,
    }

    def __init__(self, db: Session):
        super().__init__(db, ResourceVersion)

    def list_for_resource(self, resource_id: int, spec: ProjectionSpec) -> Page:
        return self.list(spec, ResourceVersion.resource_id == resource_id)

    def find(self, resource_id: int, identifier: ResolvedIdentifier) -> Optional[ResourceVersion]:
        """
        Resolve a version of one resource.

        LATEST: newest by release date.
        BY_TOKEN: match on the uuid token.
        BY_ID: match on the numeric id.
        """
        query = self.query().filter(ResourceVersion.resource_id == resource_id)

        if identifier.mode is IdentifierMode.LATEST:
            return query.order_by(ResourceVersion.release_date.desc(), ResourceVersion.id.desc()).first()

        if identifier.mode is IdentifierMode.BY_TOKEN:
            return query.filter(ResourceVersion.uuid == identifier.key).first()

        version_id = identifier.numeric_id
        if version_id is None:
            return None
        return query.filter(ResourceVersion.id == version_id).first()
