import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from tagserver.app.composition import AppDependencies, create_app_dependencies
from tagserver.app.config.settings import Settings
from tagserver.app.constants import SERVICE_NAME
from tagserver.app.core.logging import configure_logging
from tagserver.app.routers.health import health_router
from tagserver.app.routers.tags import tags_router


def create_app(dependencies: AppDependencies) -> FastAPI:
    """Build the application around explicitly wired dependencies."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.bind(
            service_name=SERVICE_NAME,
            event="tagserver_starting",
            tool_backend=dependencies.settings.tool_backend,
        ).info("")
        try:
            yield
        finally:
            logger.bind(service_name=SERVICE_NAME, event="tagserver_stopping").info("")

    app = FastAPI(
        title="Tag Catalog API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = dependencies.settings
    app.state.tool_runner = dependencies.tool_runner
    app.state.tag_streamer = dependencies.tag_streamer

    app.include_router(health_router)
    app.include_router(tags_router)
    return app


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    app = create_app(create_app_dependencies(settings))
    server = uvicorn.Server(
        uvicorn.Config(app, host=settings.server_host, port=settings.server_port, log_config=None)
    )
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits by itself when it cannot bind; only startup failures are reported here.
        if server.started:
            raise
        logger.bind(
            service_name=SERVICE_NAME,
            event="server_bind_failed",
            host=settings.server_host,
            port=settings.server_port,
            uvicorn_exit_code=e.code,
        ).error("could not listen on {}:{}", settings.server_host, settings.server_port)
        sys.exit(1)


if __name__ == "__main__":
    main()
