"""
Update request DTOs.

An update request asks the ingestion pipeline to re-sync one resource. Every
facet defaults to "include": callers opt out by sending an explicit false.
"""

from typing import Optional
from pydantic import BaseModel, Field


class UpdateRequestCreate(BaseModel):
    """Request body for POST /resources/{id}/requestUpdate."""
    versions: Optional[bool] = Field(None, description="Refresh the version list")
    updates: Optional[bool] = Field(None, description="Refresh the update list")
    reviews: Optional[bool] = Field(None, description="Refresh the review list")
    delete: Optional[bool] = Field(None, description="Allow deletion if the resource is gone upstream")

    def facets(self) -> dict[str, bool]:
        return {
            "versions": self.versions is not False,
            "updates": self.updates is not False,
            "reviews": self.reviews is not False,
            "delete": self.delete is not False,
        }


class UpdateRequestAccepted(BaseModel):
    """Confirmation returned once a request has been persisted."""
    msg: str = "Resource update requested"
    resource: int
    versions: bool
    updates: bool
    reviews: bool
    delete: bool
