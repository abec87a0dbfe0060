"""
Resource DTOs - the catalogued plugins and their nested descriptors.
"""

from enum import Enum
from typing import List, Optional
from pydantic import Field

from spiget_types.base import CatalogModel, Icon, IdReference, Rating


class IconType(str, Enum):
    RAW = "raw"
    URL = "url"


class ResourceFile(CatalogModel):
    type: Optional[str] = Field(None, description="File extension including the dot, e.g. '.jar'")
    size: Optional[float] = None
    size_unit: Optional[str] = None
    url: Optional[str] = None
    external_url: Optional[str] = None


class ResourceVersionReference(CatalogModel):
    id: int
    uuid: Optional[str] = None


class ResourceGet(CatalogModel):
    id: int
    name: Optional[str] = None
    tag: Optional[str] = None
    contributors: Optional[str] = None
    likes: int = 0
    downloads: int = 0
    rating: Rating = Field(default_factory=Rating)
    release_date: Optional[int] = None
    update_date: Optional[int] = None
    author: Optional[IdReference] = None
    category: Optional[IdReference] = None
    icon: Icon = Field(default_factory=Icon)
    file: ResourceFile = Field(default_factory=ResourceFile)
    external: bool = False
    premium: bool = False
    price: Optional[float] = None
    currency: Optional[str] = None
    version: Optional[ResourceVersionReference] = None
    tested_versions: List[str] = Field(default_factory=list)
    source_code_link: Optional[str] = None
    donation_link: Optional[str] = None
    description: Optional[str] = None


# Fields served by the list routes
RESOURCE_LIST_FIELDS = [
    "id",
    "name",
    "tag",
    "contributors",
    "likes",
    "file",
    "testedVersions",
    "rating",
    "releaseDate",
    "updateDate",
    "downloads",
    "external",
    "icon",
    "premium",
    "price",
    "currency",
    "author",
    "category",
    "version",
    "sourceCodeLink",
    "donationLink",
]

RESOURCE_ALL_FIELDS = RESOURCE_LIST_FIELDS + ["description"]

# /for/{versions} only reports what was matched
RESOURCE_VERSION_MATCH_FIELDS = ["id", "name", "testedVersions"]
