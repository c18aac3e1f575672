"""Projection of parsed tags into the flat records served on /tags.

Pure functions: each tag maps independently, so callers may project tags in any
order or concurrently.
"""
from __future__ import annotations

from typing import Iterator

from tagserver.app.domain.models import Tag, TagCatalog
from tagserver.app.schemas.tags import ProjectedTag, TagDescription


def project_tag(tag: Tag, table_name: str) -> ProjectedTag:
    return ProjectedTag(
        path=f"{table_name}:{tag.name}",
        group=table_name,
        # Only the exact literal counts; "True", "1" and "" are all read-only.
        writable=tag.writable == "true",
        type=tag.type,
        description=TagDescription(**tag.description),
    )


def project_catalog(catalog: TagCatalog) -> Iterator[ProjectedTag]:
    """Yield one ProjectedTag per tag, tables then tags in source order."""
    for table in catalog.tables:
        for tag in table.tags:
            yield project_tag(tag, table.name)
