"""
Classification of sub-resource identifiers in request paths.

Versions and updates can be addressed as "latest", by numeric id, or by the
opaque uuid token the ingestion pipeline assigns to versions. Numeric ids are
short and tokens are long, so the segment length tells them apart.
"""

from dataclasses import dataclass
from enum import Enum

LATEST = "latest"
# Longest numeric id; anything longer is a uuid token
MAX_ID_LENGTH = 32


class IdentifierMode(str, Enum):
    LATEST = "latest"
    BY_ID = "id"
    BY_TOKEN = "token"


@dataclass(frozen=True)
class ResolvedIdentifier:
    mode: IdentifierMode
    key: str

    @property
    def numeric_id(self) -> int | None:
        """Primary id for BY_ID lookups; None when the segment is not a number."""
        if self.mode is not IdentifierMode.BY_ID or not (self.key.isascii() and self.key.isdigit()):
            return None
        return int(self.key)


def resolve_identifier(segment: str) -> ResolvedIdentifier:
    if segment == LATEST:
        return ResolvedIdentifier(IdentifierMode.LATEST, segment)
    if len(segment) > MAX_ID_LENGTH:
        return ResolvedIdentifier(IdentifierMode.BY_TOKEN, segment)
    return ResolvedIdentifier(IdentifierMode.BY_ID, segment)
