"""
Node role checks.

A deployment runs one master and any number of mirrors. Mirrors answer reads
from their replica but hand bandwidth-heavy and write-like operations to the
master.
"""

from fastapi import Depends, Request

from spiget_backend.exceptions import MasterRedirect
from spiget_backend.settings import BackendSettings, get_settings


def master_location(request: Request, settings: BackendSettings) -> str:
    """The same path and query on the master node."""
    location = settings.MASTER_URL.rstrip("/") + request.url.path
    if request.url.query:
        location += "?" + request.url.query
    return location


def require_master(request: Request, settings: BackendSettings = Depends(get_settings)) -> None:
    """
    FastAPI dependency for master-only routes.

    Declare it in the route's ``dependencies`` so it runs before any store
    or upstream dependency is resolved.

    Raises:
        MasterRedirect: On every non-master node
    """
    if not settings.is_master:
        raise MasterRedirect(master_location(request, settings))
