from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from tagserver.app.constants import SERVICE_NAME, TAGS_ERROR_MESSAGE
from tagserver.app.domain.errors import (
    EncodingTransportError,
    MalformedCatalogError,
    ToolCancelledError,
    ToolExecutionError,
)
from tagserver.app.routers.utils import JSONDocumentResponse, disconnect_waiter

CLIENT_CLOSED_REQUEST = 499

TAGS_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


tags_router = APIRouter(tags=["Tags"])


@tags_router.api_route(
    "/tags",
    methods=TAGS_METHODS,
    summary="List exiftool tag definitions",
    description="Runs `exiftool -listx` and returns every tag of every table as a flat list. The tool runs once per request; nothing is cached. Aborting the request stops the tool.",
    responses={
        200: {"description": "All tags, as {\"tags\": [...]}."},
        500: {"description": "The tool failed or its output could not be parsed."},
    },
)
async def list_tags(request: Request) -> Response:
    streamer = getattr(request.app.state, "tag_streamer", None)
    if streamer is None:
        _log("tags_failed", reason="streamer_not_initialized")
        return Response(status_code=500, content=TAGS_ERROR_MESSAGE, media_type="text/plain")

    try:
        body = await streamer.render(disconnect_waiter(request))
    except ToolCancelledError as e:
        _log("tags_cancelled", error=str(e))
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except (ToolExecutionError, MalformedCatalogError) as e:
        logger.bind(service_name=SERVICE_NAME, event="tags_failed", error_type=type(e).__name__).error(str(e))
        return Response(status_code=500, content=TAGS_ERROR_MESSAGE, media_type="text/plain")
    except EncodingTransportError as e:
        logger.bind(service_name=SERVICE_NAME, event="tags_encoding_failed").error(str(e))
        return Response(status_code=500)

    _log("tags_served", bytes=len(body))
    return JSONDocumentResponse(content=body)
