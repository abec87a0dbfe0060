"""
Exceptions with error codes and rich metadata.

This module provides custom HTTP exceptions that integrate with the error
registry to provide consistent error responses with unique error codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status
import inspect
from datetime import datetime, timezone

from spiget_types.errors import ErrorDebugInfo, ErrorResponse


class SpigetException(HTTPException):
    """
    Base exception class for all catalog API errors.

    Provides:
    - Unique error codes from registry
    - Structured error responses
    - Debug information in development mode
    """

    def __init__(
        self,
        error_code: str,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize exception with error code and metadata.

        Args:
            error_code: Error code from error registry (e.g., "NF_001")
            detail: Message for the client (overrides registry message if provided)
            headers: HTTP response headers
            context: Additional context for logging and debugging
        """
        self.error_code = error_code
        self.context = context or {}
        # HTTPException substitutes the status phrase for a missing detail
        self.explicit_detail = detail

        # Get caller information for debugging
        self.function_name = None
        self.file_name = None
        self.line_number = None
        frame = inspect.currentframe()
        if frame and frame.f_back:
            caller_frame = frame.f_back.f_back  # Skip this __init__ and the subclass __init__
            if caller_frame:
                self.function_name = caller_frame.f_code.co_name
                self.file_name = caller_frame.f_code.co_filename
                self.line_number = caller_frame.f_lineno

        # The actual status_code is set by subclasses
        super().__init__(status_code=500, detail=detail, headers=headers)

    def to_error_response(self, include_debug: bool = False) -> ErrorResponse:
        """
        Convert exception to structured ErrorResponse.

        Args:
            include_debug: Whether to include debug information (dev mode only)
        """
        from spiget_backend.exceptions.error_registry import get_error_definition

        error_def = get_error_definition(self.error_code)

        debug_info = None
        if include_debug:
            debug_info = ErrorDebugInfo(
                timestamp=datetime.now(timezone.utc).isoformat(),
                function=self.function_name,
                file=self.file_name,
                line=self.line_number,
                additional_context=self.context,
            )

        message = error_def.message
        details = None

        detail = self.explicit_detail
        if detail:
            if isinstance(detail, str):
                message = detail
            elif isinstance(detail, dict):
                details = detail
                if isinstance(detail.get("message"), str):
                    message = detail["message"]

        return ErrorResponse(
            error_code=self.error_code,
            message=message,
            details=details,
            severity=error_def.severity,
            category=error_def.category,
            debug=debug_info,
        )


# ============================================================================
# VALIDATION EXCEPTIONS (400)
# ============================================================================


class BadRequestException(SpigetException):
    """Invalid argument - 400"""

    def __init__(
        self,
        error_code: str = "VAL_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


class InvalidStateException(SpigetException):
    """Stored record cannot satisfy the request - 400"""

    def __init__(
        self,
        error_code: str = "VAL_003",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


class DuplicateRequestException(SpigetException):
    """Conflicting pending request - 400"""

    def __init__(
        self,
        error_code: str = "VAL_004",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


# ============================================================================
# NOT FOUND EXCEPTIONS (404)
# ============================================================================


class NotFoundException(SpigetException):
    """Entity not found - 404"""

    def __init__(
        self,
        error_code: str = "NF_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def of(cls, kind: str) -> "NotFoundException":
        """NotFound naming the entity kind, e.g. 'resource not found'."""
        return cls(detail=f"{kind} not found", context={"kind": kind})


# ============================================================================
# EXTERNAL SERVICE EXCEPTIONS (502)
# ============================================================================


class UpstreamUnavailableException(SpigetException):
    """Upstream origin unreachable or timed out - 502"""

    def __init__(
        self,
        error_code: str = "EXT_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_502_BAD_GATEWAY


# ============================================================================
# DATABASE EXCEPTIONS (500, 503)
# ============================================================================


class DatabaseConnectionException(SpigetException):
    """Database connection failed - 503"""

    def __init__(
        self,
        error_code: str = "DB_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class DatabaseQueryException(SpigetException):
    """Database query failed - 500"""

    def __init__(
        self,
        error_code: str = "DB_002",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ============================================================================
# INTERNAL SERVER EXCEPTIONS (500)
# ============================================================================


class InternalServerException(SpigetException):
    """Internal server error - 500"""

    def __init__(
        self,
        error_code: str = "INT_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ============================================================================
# ROLE DELEGATION (not an error: rendered as a redirect)
# ============================================================================


class MasterRedirect(Exception):
    """Raised on a non-master node for a master-only operation."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"redirect to master: {location}")
