"""
Base repository for catalog reads.

Repositories are the store port of the catalog: list(criteria, spec) returns
one Page, get-style methods return an entity or None. They are synchronous
and are called from async code through run_in_threadpool.
"""

from typing import Any, ClassVar, Generic, Mapping, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from spiget_types.base import Page, ProjectionSpec, SortOrder

ModelT = TypeVar("ModelT")


class CatalogRepository(Generic[ModelT]):
    """
    Shared pagination and ordering for one catalog table.

    Subclasses map sortable wire field names to columns in SORT_COLUMNS.
    """

    SORT_COLUMNS: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    @classmethod
    def sortable_fields(cls) -> list[str]:
        return list(cls.SORT_COLUMNS.keys())

    def query(self) -> Query:
        return self.db.query(self.model)

    def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.query().filter(self.model.id == entity_id).first()

    def exists(self, entity_id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == entity_id).first() is not None

    def _order(self, query: Query, spec: ProjectionSpec) -> Query:
        column = self.SORT_COLUMNS.get(spec.sort_field) if spec.sort_field else None
        if column is None:
            return query.order_by(self.model.id.asc())
        if spec.sort_order == SortOrder.DESC:
            return query.order_by(column.desc(), self.model.id.desc())
        return query.order_by(column.asc(), self.model.id.asc())

    def paginate(self, query: Query, spec: ProjectionSpec) -> Page:
        total = query.order_by(None).count()
        items = self._order(query, spec).offset(spec.offset).limit(spec.size).all()
        return Page(items=items, page=spec.page, size=spec.size, total=total)

    def list(self, spec: ProjectionSpec, *criteria) -> Page:
        query = self.query()
        if criteria:
            query = query.filter(*criteria)
        return self.paginate(query, spec)
