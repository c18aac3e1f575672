import pytest

from tagserver.app.config.settings import Settings
from tagserver.app.domain.errors import ToolExecutionError
from tagserver.app.infrastructure.tooling.exiftool.exiftool_runner import ExiftoolRunner
from tagserver.app.infrastructure.tooling.factory import create_tool_runner
from tagserver.app.infrastructure.tooling.static.static_catalog_runner import StaticCatalogRunner
from tagserver.app.ports.tool_runner import ToolRunner
from tests.test_data import SAMPLE_LISTX, SAMPLE_LISTX_PATH


def test_settings_defaults(monkeypatch):
    for name in ("TOOL_BACKEND", "EXIFTOOL_PATH", "SERVER_HOST", "SERVER_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.tool_backend == "exiftool"
    assert settings.exiftool_path == "exiftool"
    assert settings.server_host == "0.0.0.0"
    assert settings.server_port == 8080


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TOOL_BACKEND", "static")
    monkeypatch.setenv("STATIC_CATALOG_PATH", "/tmp/listx.xml")
    monkeypatch.setenv("SERVER_PORT", "9090")
    settings = Settings(_env_file=None)

    assert settings.tool_backend == "static"
    assert settings.static_catalog_path == "/tmp/listx.xml"
    assert settings.server_port == 9090


def test_factory_defaults_to_exiftool():
    runner = create_tool_runner(Settings(_env_file=None, TOOL_BACKEND="exiftool"))

    assert isinstance(runner, ExiftoolRunner)
    assert isinstance(runner, ToolRunner)


def test_factory_static_backend():
    settings = Settings(
        _env_file=None,
        TOOL_BACKEND=" Static ",
        STATIC_CATALOG_PATH=str(SAMPLE_LISTX_PATH),
    )

    runner = create_tool_runner(settings)

    assert isinstance(runner, StaticCatalogRunner)
    assert runner.available is True


def test_factory_static_backend_requires_path():
    with pytest.raises(ValueError, match="STATIC_CATALOG_PATH"):
        create_tool_runner(Settings(_env_file=None, TOOL_BACKEND="static", STATIC_CATALOG_PATH=""))


def test_factory_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported tool backend"):
        create_tool_runner(Settings(_env_file=None, TOOL_BACKEND="imagemagick"))


@pytest.mark.asyncio
async def test_static_runner_reads_listing():
    assert await StaticCatalogRunner(SAMPLE_LISTX_PATH).run() == SAMPLE_LISTX


@pytest.mark.asyncio
async def test_static_runner_missing_file(tmp_path):
    runner = StaticCatalogRunner(tmp_path / "missing.xml")

    assert runner.available is False
    with pytest.raises(ToolExecutionError, match="could not read"):
        await runner.run()
