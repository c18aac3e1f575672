"""Settings for the tag catalog API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # "exiftool" runs the executable per request; "static" serves a captured -listx file.
    tool_backend: str = Field("exiftool", validation_alias="TOOL_BACKEND")
    exiftool_path: str = Field("exiftool", validation_alias="EXIFTOOL_PATH")
    static_catalog_path: str = Field("", validation_alias="STATIC_CATALOG_PATH")

    server_host: str = Field("0.0.0.0", validation_alias="SERVER_HOST")
    server_port: int = Field(8080, validation_alias="SERVER_PORT")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
