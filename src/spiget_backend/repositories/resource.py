from enum import Enum
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .base import CatalogRepository
from ..model.resource import Resource, ResourceTestedVersion

# Window of the "recent updates" list, in seconds
RECENT_UPDATE_WINDOW = 7200


class VersionMatch(str, Enum):
    ANY = "any"
    ALL = "all"


class ResourceRepository(CatalogRepository[Resource]):
    """
    Read access to resources.

    List criteria are built by the *_criteria helpers and passed to list().
    """

    SORT_COLUMNS = {
        "id": Resource.id,
        "name": Resource.name,
        "likes": Resource.likes,
        "downloads": Resource.downloads,
        "rating": Resource.rating_average,
        "releaseDate": Resource.release_date,
        "updateDate": Resource.update_date,
        "price": Resource.price,
    }

    def __init__(self, db: Session):
        super().__init__(db, Resource)

    @staticmethod
    def new_criteria():
        """Never updated since first publish."""
        return Resource.release_date == Resource.update_date

    @staticmethod
    def recently_updated_criteria(now: int):
        return Resource.update_date > now - RECENT_UPDATE_WINDOW

    @staticmethod
    def premium_criteria(premium: bool):
        return Resource.premium.is_(premium)

    @staticmethod
    def tested_versions_criteria(versions: Iterable[str], match: VersionMatch):
        """
        ANY: testedVersions intersects the requested set.
        ALL: testedVersions is a superset of the requested set.
        """
        wanted = sorted(set(versions))
        matching = select(ResourceTestedVersion.resource_id).where(
            ResourceTestedVersion.version.in_(wanted)
        )
        if match == VersionMatch.ALL:
            matching = matching.group_by(ResourceTestedVersion.resource_id).having(
                func.count(ResourceTestedVersion.version.distinct()) == len(wanted)
            )
        return Resource.id.in_(matching)
