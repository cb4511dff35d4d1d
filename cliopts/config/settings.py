# cliopts/config/settings.py

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    cliopts runtime configuration, loaded from the environment (.env).
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # General
    debug: bool = Field(False, validation_alias="CLIOPTS_DEBUG")

    # Logging: file output only when a directory is configured
    logs_dir: Optional[str] = Field(None, validation_alias="CLIOPTS_LOGS_DIR")

    # Usage message layout
    usage_width: int = Field(80, ge=20, le=200, validation_alias="CLIOPTS_USAGE_WIDTH")
    usage_indent: int = Field(4, ge=0, le=16, validation_alias="CLIOPTS_USAGE_INDENT")
