"""Concrete ToolRunner that spawns exiftool once per call."""
from __future__ import annotations

import asyncio
import contextlib
import shutil
from typing import Any, Sequence

from loguru import logger

from tagserver.app.constants import EXIFTOOL_LIST_ARGS, SERVICE_NAME
from tagserver.app.domain.errors import ToolExecutionError

_STDERR_EXCERPT_CHARS = 500


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ExiftoolRunner:
    def __init__(
        self,
        executable: str = "exiftool",
        args: Sequence[str] = EXIFTOOL_LIST_ARGS,
    ) -> None:
        self._executable = executable
        self._args = tuple(args)

    @property
    def available(self) -> bool:
        return shutil.which(self._executable) is not None

    async def run(self) -> bytes:
        try:
            process = await asyncio.create_subprocess_exec(
                self._executable,
                *self._args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ToolExecutionError(f"could not start {self._executable}: {exc}") from exc

        _log("tool_started", executable=self._executable, pid=process.pid)
        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            await self._terminate(process)
            raise

        if process.returncode != 0:
            excerpt = stderr.decode("utf-8", errors="replace").strip()[:_STDERR_EXCERPT_CHARS]
            raise ToolExecutionError(
                f"{self._executable} exited with status {process.returncode}: {excerpt}"
            )
        return stdout

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        await process.wait()
        _log("tool_cancelled", executable=self._executable, pid=process.pid, returncode=process.returncode)
