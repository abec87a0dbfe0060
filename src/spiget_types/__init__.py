"""
Wire models for the Spiget catalog API.

Pure Pydantic DTOs shared by the backend and any API client. Backend-specific
concerns (SQLAlchemy models, repositories, routing) live in spiget_backend.
"""
