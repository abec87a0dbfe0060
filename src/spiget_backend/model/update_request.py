"""
Pending re-sync requests.

Created by the API, consumed (and deleted) by the ingestion pipeline. A row
that exists is pending. Uniqueness per (type, requested_id) is checked by the
API before insert and is not enforced here.
"""

from sqlalchemy import BigInteger, Boolean, Column, Index, Integer, String

from .base import Base


class UpdateRequest(Base):
    __tablename__ = 'update_request'
    __table_args__ = (
        Index('idx_update_request_target', 'type', 'requested_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False, default="resource")
    requested_id = Column(Integer, nullable=False)
    requested = Column(BigInteger, nullable=False)  # epoch millis

    versions = Column(Boolean, nullable=False, default=True)
    updates = Column(Boolean, nullable=False, default=True)
    reviews = Column(Boolean, nullable=False, default=True)
    delete = Column(Boolean, nullable=False, default=True)
