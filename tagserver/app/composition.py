"""
Composition root: single place where concrete implementations are wired.

Builds settings, the tool runner and the tag streamer from config. Used by
create_app to populate app.state. No DI container library, explicit wiring
only. The runner backend (exiftool or static listing file) is selected from
settings.
"""

from tagserver.app.config.settings import Settings
from tagserver.app.infrastructure.tooling.factory import create_tool_runner
from tagserver.app.ports.tool_runner import ToolRunner
from tagserver.app.services.tag_stream import TagStreamer


class AppDependencies:
    """Holds wired dependencies. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        tool_runner: ToolRunner,
        tag_streamer: TagStreamer,
    ) -> None:
        self._settings = settings
        self._tool_runner = tool_runner
        self._tag_streamer = tag_streamer

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def tool_runner(self) -> ToolRunner:
        return self._tool_runner

    @property
    def tag_streamer(self) -> TagStreamer:
        return self._tag_streamer


def create_app_dependencies(settings: Settings | None = None) -> AppDependencies:
    """
    Composition root: build all app dependencies in one place.
    Runners hold no connections, so there is no connect/close lifecycle to own.
    """
    _settings = settings or Settings()
    runner = create_tool_runner(_settings)

    return AppDependencies(
        settings=_settings,
        tool_runner=runner,
        tag_streamer=TagStreamer(runner),
    )
