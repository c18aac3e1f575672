"""Static ToolRunner for local mode and hosts without exiftool.
Serves a previously captured `exiftool -listx` output file instead of spawning the tool.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

from tagserver.app.domain.errors import ToolExecutionError


class StaticCatalogRunner:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def available(self) -> bool:
        return self._path.is_file()

    async def run(self) -> bytes:
        try:
            return await asyncio.to_thread(self._path.read_bytes)
        except OSError as exc:
            raise ToolExecutionError(f"could not read tag listing {self._path}: {exc}") from exc
