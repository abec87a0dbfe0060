"""
Error handling package for the catalog backend.

This package provides:
- Custom exception classes with error codes
- Error registry management
- FastAPI exception handlers

Usage:
    from spiget_backend.exceptions import (
        NotFoundException,
        register_exception_handlers,
    )
"""

from spiget_backend.exceptions.exceptions import (
    SpigetException,
    BadRequestException,
    InvalidStateException,
    DuplicateRequestException,
    NotFoundException,
    UpstreamUnavailableException,
    DatabaseConnectionException,
    DatabaseQueryException,
    InternalServerException,
    MasterRedirect,
)

from spiget_backend.exceptions.error_registry import (
    load_error_registry,
    get_error_definition,
    get_all_error_codes,
    validate_error_registry,
)

from spiget_backend.exceptions.error_handlers import (
    register_exception_handlers,
    spiget_exception_handler,
    master_redirect_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)


__all__ = [
    "SpigetException",
    "BadRequestException",
    "InvalidStateException",
    "DuplicateRequestException",
    "NotFoundException",
    "UpstreamUnavailableException",
    "DatabaseConnectionException",
    "DatabaseQueryException",
    "InternalServerException",
    "MasterRedirect",
    "load_error_registry",
    "get_error_definition",
    "get_all_error_codes",
    "validate_error_registry",
    "register_exception_handlers",
    "spiget_exception_handler",
    "master_redirect_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
]
