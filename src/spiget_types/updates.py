from typing import Optional

from spiget_types.base import CatalogModel


class ResourceUpdateGet(CatalogModel):
    id: int
    resource: int
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[int] = None
    likes: int = 0


UPDATE_ALL_FIELDS = ["id", "resource", "title", "description", "date", "likes"]
