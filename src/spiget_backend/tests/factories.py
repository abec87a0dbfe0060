"""Builders for catalog rows used across the test modules."""

from spiget_backend.model import (
    Author,
    Resource,
    ResourceReview,
    ResourceTestedVersion,
    ResourceUpdate,
    ResourceVersion,
)


def make_resource(resource_id: int, tested_versions: tuple[str, ...] = (), **kwargs) -> Resource:
    values = dict(
        id=resource_id,
        name=f"Plugin {resource_id}",
        tag="A plugin",
        likes=0,
        downloads=0,
        release_date=1_500_000_000,
        update_date=1_500_000_000,
        file_type=".jar",
        file_size=12.5,
        file_size_unit="KB",
        file_url=f"resources/plugin.{resource_id}/download?version=1",
        external=False,
        premium=False,
    )
    values.update(kwargs)
    resource = Resource(**values)
    resource.tested_version_rows = [ResourceTestedVersion(version=v) for v in tested_versions]
    return resource


def make_author(author_id: int, name: str = "someone", **kwargs) -> Author:
    return Author(id=author_id, name=name, **kwargs)


def make_review(review_id: int, resource_id: int, **kwargs) -> ResourceReview:
    values = dict(id=review_id, resource_id=resource_id, message="Works fine", date=1_500_000_100)
    values.update(kwargs)
    return ResourceReview(**values)


def make_update(update_id: int, resource_id: int, date: int, **kwargs) -> ResourceUpdate:
    return ResourceUpdate(id=update_id, resource_id=resource_id, title=f"Update {update_id}", date=date, **kwargs)


def make_version(version_id: int, resource_id: int, release_date: int, **kwargs) -> ResourceVersion:
    values = dict(
        id=version_id,
        resource_id=resource_id,
        uuid=f"{version_id:08d}-0000-4000-8000-{resource_id:012d}",
        name=f"1.{version_id}",
        release_date=release_date,
    )
    values.update(kwargs)
    return ResourceVersion(**values)
