from sqlalchemy.orm import Session

from .base import CatalogRepository
from ..model.author import Author


class AuthorRepository(CatalogRepository[Author]):

    SORT_COLUMNS = {
        "id": Author.id,
        "name": Author.name,
    }

    def __init__(self, db: Session):
        super().__init__(db, Author)
