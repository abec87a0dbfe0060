from enum import Enum
from math import ceil
from typing import Any, Generic, List, Optional, TypeVar
from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProjectionSpec(BaseModel):
    """Validated projection and page/sort specification for one request."""
    page: int = 1
    size: int = 10
    sort_field: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC
    fields: List[str] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


class Page(BaseModel, Generic[T]):
    """One page of a list query plus total-count metadata."""
    items: List[T] = Field(default_factory=list)
    page: int = 1
    size: int = 10
    total: int = 0

    @property
    def pages(self) -> int:
        if self.size <= 0:
            return 0
        return ceil(self.total / self.size)


class CatalogModel(BaseModel):
    """
    Base for catalog entities.

    Validates from ORM attributes (snake_case) and serializes with the
    camelCase names the public API has always used.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class IdReference(CatalogModel):
    id: int


class Rating(CatalogModel):
    count: int = 0
    average: float = 0.0


class Icon(CatalogModel):
    url: Optional[str] = None
    data: Optional[str] = None
