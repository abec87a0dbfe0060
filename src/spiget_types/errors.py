"""
Error handling models and definitions for the Spiget catalog API.

This module provides structured error handling with:
- Unique error codes for every exception
- Registry-backed definitions with developer notes
- A stable client-facing error body
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorSeverity(str, Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EXTERNAL_SERVICE = "external_service"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorDefinition(BaseModel):
    """Complete error definition from registry."""
    model_config = ConfigDict(use_enum_values=True)

    code: str = Field(..., description="Unique error code (e.g., NF_001)")
    http_status: int = Field(..., description="HTTP status code")
    category: ErrorCategory = Field(..., description="Error category")
    severity: ErrorSeverity = Field(..., description="Error severity")
    title: str = Field(..., description="Short error title")
    message: str = Field(..., description="Default plain text message")

    # Developer information
    internal_description: str = Field(..., description="Internal description for developers")
    common_causes: list[str] = Field(default_factory=list, description="Common causes of this error")


class ErrorDebugInfo(BaseModel):
    """Debug information included in development mode."""
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    function: Optional[str] = Field(None, description="Function where error occurred")
    file: Optional[str] = Field(None, description="File where error occurred")
    line: Optional[int] = Field(None, description="Line number where error occurred")
    additional_context: Optional[dict[str, Any]] = Field(None, description="Additional context")


class ErrorResponse(BaseModel):
    """Standard error response structure sent to clients."""
    model_config = ConfigDict(use_enum_values=True)

    error_code: str = Field(..., description="Unique error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(None, description="Additional error details")
    severity: ErrorSeverity = Field(..., description="Error severity")
    category: ErrorCategory = Field(..., description="Error category")
    debug: Optional[ErrorDebugInfo] = Field(None, description="Debug information (dev mode only)")

    def to_body(self, include_debug: bool = False) -> dict[str, Any]:
        """Client-facing body; 'error' carries the message for API compatibility."""
        body: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        if include_debug and self.debug:
            body["debug"] = self.debug.model_dump(exclude_none=True)
        return body
