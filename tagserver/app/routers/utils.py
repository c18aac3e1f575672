from __future__ import annotations

from typing import Any

from fastapi import Request, Response
from loguru import logger
from starlette.types import Receive, Scope, Send

from tagserver.app.constants import SERVICE_NAME


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def disconnect_waiter(request: Request):
    """Coroutine function that returns once the ASGI server reports the client gone."""

    async def wait_for_disconnect() -> None:
        while True:
            message = await request.receive()
            if message["type"] == "http.disconnect":
                return

    return wait_for_disconnect


class JSONDocumentResponse(Response):
    """Pre-encoded JSON body; a failed write is logged and the request still completes.

    uvicorn drops writes to a client that already went away, so this only fires
    on servers that raise OSError from a broken transport.
    """

    media_type = "application/json"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except OSError as exc:
            _log("tags_write_failed", error=str(exc), content_length=len(self.body))


__all__ = [
    "disconnect_waiter",
    "JSONDocumentResponse",
]
