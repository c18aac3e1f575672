"""Tool runner factory: selects implementation from config."""
from __future__ import annotations

from tagserver.app.config.settings import Settings
from tagserver.app.constants import EXIFTOOL_LIST_ARGS, ToolBackend
from tagserver.app.ports.tool_runner import ToolRunner
from tagserver.app.infrastructure.tooling.exiftool.exiftool_runner import ExiftoolRunner
from tagserver.app.infrastructure.tooling.static.static_catalog_runner import StaticCatalogRunner


def create_tool_runner(settings: Settings) -> ToolRunner:
    backend = settings.tool_backend.strip().lower()

    if backend == ToolBackend.EXIFTOOL:
        return ExiftoolRunner(settings.exiftool_path, EXIFTOOL_LIST_ARGS)

    if backend == ToolBackend.STATIC:
        if not settings.static_catalog_path:
            raise ValueError("STATIC_CATALOG_PATH is required for the static tool backend")
        return StaticCatalogRunner(settings.static_catalog_path)

    raise ValueError(f"Unsupported tool backend: {backend}")
