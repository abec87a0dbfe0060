"""
Payloads of the SpigotMC "simple" API (0.2).

The simple API encodes every number as a string; pydantic coerces them.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class SpigotAuthor(BaseModel):
    id: int
    username: Optional[str] = None


class SpigotPremium(BaseModel):
    price: float = 0.0
    currency: Optional[str] = None


class SpigotReviewStats(BaseModel):
    unique: int = 0
    total: int = 0


class SpigotStats(BaseModel):
    downloads: int = 0
    updates: int = 0
    reviews: SpigotReviewStats = Field(default_factory=SpigotReviewStats)
    rating: float = 0.0


class SpigotResource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: Optional[str] = None
    tag: Optional[str] = None
    current_version: Optional[str] = None
    native_minecraft_version: Optional[str] = None
    supported_minecraft_versions: list[str] = Field(default_factory=list)
    author: Optional[SpigotAuthor] = None
    premium: Optional[SpigotPremium] = None
    stats: Optional[SpigotStats] = None

    def to_catalog_fields(self) -> dict[str, Any]:
        """Map onto catalog wire names; only fields the upstream actually sent."""
        fields: dict[str, Any] = {}
        if self.title is not None:
            fields["name"] = self.title
        if self.tag is not None:
            fields["tag"] = self.tag
        if self.supported_minecraft_versions:
            fields["testedVersions"] = list(self.supported_minecraft_versions)
        if self.stats is not None:
            fields["downloads"] = self.stats.downloads
            fields["rating"] = {
                "count": self.stats.reviews.total,
                "average": self.stats.rating,
            }
        if self.premium is not None and self.premium.price > 0:
            fields["price"] = self.premium.price
            fields["currency"] = self.premium.currency
        return fields
