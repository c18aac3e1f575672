"""API-level constants shared across modules."""
from __future__ import annotations

SERVICE_NAME = "tagserver"

# Fixed argument set: full tag listing as XML.
EXIFTOOL_LIST_ARGS: tuple[str, ...] = ("-listx",)

DESCRIPTION_LANGUAGES: tuple[str, ...] = ("en", "de", "es", "it")

TAGS_ERROR_MESSAGE = "Error while getting tags"


class ToolBackend:
    EXIFTOOL = "exiftool"
    STATIC = "static"
