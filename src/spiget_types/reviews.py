from typing import Optional
from pydantic import Field

from spiget_types.base import CatalogModel, IdReference, Rating


class ResourceReviewGet(CatalogModel):
    id: int
    resource: int
    author: Optional[IdReference] = None
    rating: Rating = Field(default_factory=Rating)
    message: Optional[str] = None
    response_message: Optional[str] = None
    version: Optional[str] = None
    date: Optional[int] = None


REVIEW_ALL_FIELDS = [
    "id",
    "resource",
    "author",
    "rating",
    "message",
    "responseMessage",
    "version",
    "date",
]
