"""
Per-request tag pipeline: run the tool, parse, project, encode.

The pipeline runs inside its own task so a disconnect watcher can cancel it as a
whole; cancelling it kills the tool process and drops any pending queue work.
Projected tags are handed to a single encoder task through a queue sized to
hold the whole catalog, so the producer never waits on the encoder. Parsing,
projection and serialisation run in worker threads to keep the event loop free.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from loguru import logger

from tagserver.app.constants import SERVICE_NAME
from tagserver.app.domain.catalog_parser import parse_catalog
from tagserver.app.domain.errors import EncodingTransportError, ToolCancelledError
from tagserver.app.domain.models import TagCatalog
from tagserver.app.ports.tool_runner import ToolRunner
from tagserver.app.schemas.tags import ProjectedTag, TagsDocument
from tagserver.app.services.tag_projector import project_catalog

CatalogParser = Callable[[bytes], TagCatalog]
DisconnectWaiter = Callable[[], Awaitable[None]]

_END_OF_TAGS = object()


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _project_all(catalog: TagCatalog) -> list[ProjectedTag]:
    return list(project_catalog(catalog))


def _encode_document(tags: list[ProjectedTag]) -> bytes:
    return TagsDocument(tags=tags).model_dump_json().encode("utf-8")


async def _cancel_and_wait(*tasks: asyncio.Task) -> None:
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


class TagStreamer:
    """Builds the `{"tags": [...]}` document for one request."""

    def __init__(self, runner: ToolRunner, parser: CatalogParser = parse_catalog) -> None:
        self._runner = runner
        self._parser = parser

    @property
    def runner(self) -> ToolRunner:
        return self._runner

    async def render(self, wait_for_disconnect: DisconnectWaiter) -> bytes:
        """
        Return the encoded JSON document.

        Raises ToolExecutionError / MalformedCatalogError from the tool and parser,
        EncodingTransportError if the document cannot be serialised, and
        ToolCancelledError when `wait_for_disconnect` returns before the document is ready.
        """
        disconnected = asyncio.Event()
        scope = asyncio.create_task(self._run_pipeline())
        watcher = asyncio.create_task(self._watch(wait_for_disconnect, scope, disconnected))
        try:
            return await scope
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not disconnected.is_set() or (current is not None and current.cancelling()):
                raise
            raise ToolCancelledError("request aborted by client") from None
        finally:
            await _cancel_and_wait(watcher, scope)

    async def _watch(
        self,
        wait_for_disconnect: DisconnectWaiter,
        scope: asyncio.Task,
        disconnected: asyncio.Event,
    ) -> None:
        await wait_for_disconnect()
        if not scope.done():
            disconnected.set()
            scope.cancel()

    async def _run_pipeline(self) -> bytes:
        raw = await self._runner.run()
        catalog = await asyncio.to_thread(self._parser, raw)
        total = catalog.tag_count
        _log("catalog_parsed", tables=len(catalog.tables), tags=total)

        # Room for every tag plus the end marker.
        queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=total + 1)
        encoder = asyncio.create_task(self._encode(queue))
        try:
            projected_tags = await asyncio.to_thread(_project_all, catalog)
            for projected in projected_tags:
                await queue.put(projected)
            await queue.put(_END_OF_TAGS)
            return await encoder
        finally:
            await _cancel_and_wait(encoder)

    async def _encode(self, queue: asyncio.Queue[Any]) -> bytes:
        tags: list[ProjectedTag] = []
        while True:
            item = await queue.get()
            if item is _END_OF_TAGS:
                break
            tags.append(item)
        try:
            return await asyncio.to_thread(_encode_document, tags)
        except ValueError as exc:
            raise EncodingTransportError(f"could not encode tags document: {exc}") from exc
