"""
Resource models mirrored from the SpigotMC marketplace.

Rows are written by the ingestion pipeline; the API only reads them. Nested
descriptors of the public API (file, icon, rating, author, ...) are exposed as
read-only properties so the wire DTOs can validate straight from a row.
"""

from sqlalchemy import BigInteger, Boolean, Column, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class Resource(Base):
    __tablename__ = 'resource'
    __table_args__ = (
        Index('idx_resource_update_date', 'update_date'),
        Index('idx_resource_premium', 'premium'),
        Index('idx_resource_author', 'author_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255))
    tag = Column(String(255))
    contributors = Column(String(255))
    likes = Column(Integer, nullable=False, default=0)
    downloads = Column(Integer, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    rating_average = Column(Float, nullable=False, default=0.0)

    # Epoch seconds
    release_date = Column(BigInteger)
    update_date = Column(BigInteger)

    author_id = Column(Integer)
    category_id = Column(Integer)

    icon_url = Column(String(1024))
    icon_data = Column(Text)  # base64

    file_type = Column(String(32))
    file_size = Column(Float)
    file_size_unit = Column(String(8))
    file_url = Column(String(1024))
    file_external_url = Column(String(2048))
    external = Column(Boolean, nullable=False, default=False)

    premium = Column(Boolean, nullable=False, default=False)
    price = Column(Float)
    currency = Column(String(8))

    version_id = Column(Integer)
    version_uuid = Column(String(64))

    source_code_link = Column(String(2048))
    donation_link = Column(String(2048))
    description = Column(Text)

    tested_version_rows = relationship(
        'ResourceTestedVersion',
        back_populates='resource',
        cascade='all, delete-orphan',
        lazy='selectin',
        order_by='ResourceTestedVersion.version',
    )

    @property
    def tested_versions(self) -> list[str]:
        return [row.version for row in self.tested_version_rows]

    @property
    def rating(self) -> dict:
        return {"count": self.rating_count or 0, "average": self.rating_average or 0.0}

    @property
    def icon(self) -> dict:
        return {"url": self.icon_url, "data": self.icon_data}

    @property
    def file(self) -> dict:
        return {
            "type": self.file_type,
            "size": self.file_size,
            "size_unit": self.file_size_unit,
            "url": self.file_url,
            "external_url": self.file_external_url,
        }

    @property
    def author(self) -> dict | None:
        return {"id": self.author_id} if self.author_id is not None else None

    @property
    def category(self) -> dict | None:
        return {"id": self.category_id} if self.category_id is not None else None

    @property
    def version(self) -> dict | None:
        if self.version_id is None:
            return None
        return {"id": self.version_id, "uuid": self.version_uuid}


class ResourceTestedVersion(Base):
    """One entry of a resource's testedVersions set."""
    __tablename__ = 'resource_tested_version'
    __table_args__ = (
        Index('idx_resource_tested_version_version', 'version'),
    )

    resource_id = Column(Integer, ForeignKey('resource.id', ondelete='CASCADE'), primary_key=True)
    version = Column(String(32), primary_key=True)

    resource = relationship('Resource', back_populates='tested_version_rows')


class ResourceReview(Base):
    __tablename__ = 'resource_review'
    __table_args__ = (
        Index('idx_resource_review_resource', 'resource_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    resource_id = Column(Integer, nullable=False)
    author_id = Column(Integer)
    rating_count = Column(Integer, nullable=False, default=0)
    rating_average = Column(Float, nullable=False, default=0.0)
    message = Column(Text)
    response_message = Column(Text)
    version = Column(String(255))
    date = Column(BigInteger)

    @property
    def resource(self) -> int:
        return self.resource_id

    @property
    def author(self) -> dict | None:
        return {"id": self.author_id} if self.author_id is not None else None

    @property
    def rating(self) -> dict:
        return {"count": self.rating_count or 0, "average": self.rating_average or 0.0}


class ResourceUpdate(Base):
    __tablename__ = 'resource_update'
    __table_args__ = (
        Index('idx_resource_update_resource_date', 'resource_id', 'date'),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    resource_id = Column(Integer, nullable=False)
    title = Column(String(1024))
    description = Column(Text)  # base64
    date = Column(BigInteger)
    likes = Column(Integer, nullable=False, default=0)

    @property
    def resource(self) -> int:
        return self.resource_id


class ResourceVersion(Base):
    __tablename__ = 'resource_version'
    __table_args__ = (
        Index('idx_resource_version_resource_release', 'resource_id', 'release_date'),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    uuid = Column(String(64), unique=True)
    resource_id = Column(Integer, nullable=False)
    name = Column(String(255))
    release_date = Column(BigInteger)
    downloads = Column(Integer, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    rating_average = Column(Float, nullable=False, default=0.0)
    url = Column(String(1024))

    @property
    def resource(self) -> int:
        return self.resource_id

    @property
    def rating(self) -> dict:
        return {"count": self.rating_count or 0, "average": self.rating_average or 0.0}
