from .base import Base, metadata
from .author import Author
from .resource import (
    Resource,
    ResourceTestedVersion,
    ResourceReview,
    ResourceUpdate,
    ResourceVersion,
)
from .update_request import UpdateRequest

__all__ = [
    'Base',
    'metadata',
    'Author',
    'Resource',
    'ResourceTestedVersion',
    'ResourceReview',
    'ResourceUpdate',
    'ResourceVersion',
    'UpdateRequest',
]
