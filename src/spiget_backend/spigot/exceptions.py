"""
Custom exceptions for the SpigotMC upstream integration.
"""

from typing import Optional


class SpigotError(Exception):
    """Base exception for upstream errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.detail:
            parts.append(f"- {self.detail}")
        return " ".join(parts)


class SpigotAPIError(SpigotError):
    """Raised when the upstream returns an error or an unreadable payload."""

    pass


class SpigotConnectionError(SpigotError):
    """Raised when the upstream cannot be reached."""

    def __init__(self, message: str = "Failed to connect to SpigotMC", **kwargs):
        super().__init__(message, **kwargs)


class SpigotTimeoutError(SpigotError):
    """Raised when an upstream call exceeds its time budget."""

    def __init__(self, operation: str, timeout: float, **kwargs):
        message = f"Operation '{operation}' timed out after {timeout}s"
        super().__init__(message, **kwargs)


class SpigotResourceNotFoundError(SpigotError):
    """Raised when the upstream does not know the resource."""

    def __init__(self, resource_id: int, **kwargs):
        super().__init__(f"Resource not found upstream: {resource_id}", status_code=404, **kwargs)
        self.resource_id = resource_id
