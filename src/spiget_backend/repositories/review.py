from sqlalchemy.orm import Session

from spiget_types.base import Page, ProjectionSpec
from .base import CatalogRepository
from ..model.resource import ResourceReview


class ReviewRepository(CatalogRepository[ResourceReview]):

    SORT_COLUMNS = {
        "id": ResourceReview.id,
        "date": ResourceReview.date,
        "rating": ResourceReview.rating_average,
    }

    def __init__(self, db: Session):
        super().__init__(db, ResourceReview)

    def list_for_resource(self, resource_id: int, spec: ProjectionSpec) -> Page:
        return self.list(spec, ResourceReview.resource_id == resource_id)
