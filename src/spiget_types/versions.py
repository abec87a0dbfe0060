from typing import Optional
from pydantic import Field

from spiget_types.base import CatalogModel, Rating


class ResourceVersionGet(CatalogModel):
    id: int
    uuid: Optional[str] = None
    resource: int
    name: Optional[str] = None
    release_date: Optional[int] = None
    downloads: int = 0
    rating: Rating = Field(default_factory=Rating)
    url: Optional[str] = None


VERSION_ALL_FIELDS = [
    "id",
    "uuid",
    "resource",
    "name",
    "releaseDate",
    "downloads",
    "rating",
    "url",
]
