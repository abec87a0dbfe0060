from typing import Optional
from pydantic import Field

from spiget_types.base import CatalogModel, Icon


class AuthorGet(CatalogModel):
    id: int
    name: Optional[str] = None
    icon: Icon = Field(default_factory=Icon)


AUTHOR_ALL_FIELDS = ["id", "name", "icon"]
