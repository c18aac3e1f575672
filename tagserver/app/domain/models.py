"""Domain models for a parsed exiftool tag listing."""
from __future__ import annotations

from dataclasses import dataclass, field

from tagserver.app.constants import DESCRIPTION_LANGUAGES


def _empty_description() -> dict[str, str]:
    return {lang: "" for lang in DESCRIPTION_LANGUAGES}


@dataclass(frozen=True)
class Tag:
    """One tag definition as listed by the tool (attribute text kept verbatim)."""

    id: str
    name: str
    type: str
    writable: str
    description: dict[str, str] = field(default_factory=_empty_description)

    def __post_init__(self) -> None:
        missing = [lang for lang in DESCRIPTION_LANGUAGES if lang not in self.description]
        if missing:
            # Every language key is always present; absent text is "".
            object.__setattr__(
                self,
                "description",
                {lang: self.description.get(lang, "") for lang in DESCRIPTION_LANGUAGES},
            )


@dataclass(frozen=True)
class Table:
    name: str
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class TagCatalog:
    """Full result of one listing run. Built per request, never cached."""

    tables: tuple[Table, ...] = ()

    @property
    def tag_count(self) -> int:
        return sum(len(table.tags) for table in self.tables)
