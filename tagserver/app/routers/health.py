from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from tagserver.app.constants import SERVICE_NAME

health_router = APIRouter(tags=["Health"])

def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")

@health_router.get(
    "/health/live",
    summary="Liveness probe",
    description="Returns 200 if the API process is running.",
    responses={200: {"description": "Service is alive."}},
)
async def live() -> dict:
    return {"status": "ok"}


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 only when the configured tag listing tool can be found on the host (or the static listing file exists). The tool is not run and its version is not checked.",
    responses={
        200: {"description": "Tool is available."},
        503: {"description": "Tool not available."},
    },
)
async def ready(request: Request) -> Response:
    tool_runner = getattr(request.app.state, "tool_runner", None)
    if tool_runner is None:
        _log("components_not_initialized")
        return Response(status_code=503, content="Not ready")
    if not tool_runner.available:
        _log("tool_not_ready")
        return Response(status_code=503, content="Tool not available")
    return Response(status_code=200, content="OK")
