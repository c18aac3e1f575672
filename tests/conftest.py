from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI
from loguru import logger

from tagserver.app.routers.health import health_router
from tagserver.app.routers.tags import tags_router
from tagserver.app.services.tag_stream import TagStreamer
from tests.test_data import SAMPLE_LISTX


class FakeToolRunner:
    """Implements ToolRunner for tests; returns a canned listing or raises."""

    def __init__(
        self,
        output: bytes = SAMPLE_LISTX,
        *,
        raise_on_run: Exception | None = None,
        available: bool = True,
    ) -> None:
        self._output = output
        self._raise_on_run = raise_on_run
        self._available = available
        self.calls = 0

    @property
    def available(self) -> bool:
        return self._available

    async def run(self) -> bytes:
        self.calls += 1
        if self._raise_on_run is not None:
            raise self._raise_on_run
        return self._output


class BlockingToolRunner:
    """ToolRunner that never finishes on its own; records whether it was cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    @property
    def available(self) -> bool:
        return True

    async def run(self) -> bytes:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return b""


async def never_disconnects() -> None:
    await asyncio.Event().wait()


class RaisingStreamer:
    """Stands in for TagStreamer; render() raises the given error."""

    def __init__(self, error: Exception, runner: Any = None) -> None:
        self._error = error
        self.runner = runner

    async def render(self, wait_for_disconnect) -> bytes:  # noqa: ANN001
        raise self._error


@pytest.fixture()
def log_records():
    """Loguru records emitted during the test (message, level, extra)."""
    records: list[dict[str, Any]] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


@pytest.fixture()
def tool_runner() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture()
def test_app(tool_runner: FakeToolRunner) -> FastAPI:
    app = FastAPI()
    app.state.tool_runner = tool_runner
    app.state.tag_streamer = TagStreamer(tool_runner)
    app.include_router(health_router)
    app.include_router(tags_router)
    return app
