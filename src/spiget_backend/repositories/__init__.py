from .base import CatalogRepository
from .resource import ResourceRepository, VersionMatch
from .author import AuthorRepository
from .review import ReviewRepository
from .update import UpdateRepository
from .version import VersionRepository
from .update_request import UpdateRequestRepository

__all__ = [
    "CatalogRepository",
    "ResourceRepository",
    "VersionMatch",
    "AuthorRepository",
    "ReviewRepository",
    "UpdateRepository",
    "VersionRepository",
    "UpdateRequestRepository",
]
