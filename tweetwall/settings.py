from __future__ import annotations
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

STANDARD_CONFIG_FILENAME = "tweetwallConfig.json"


class Settings(BaseSettings):
    config_filename: Optional[str] = Field(default=None, alias="TWEETWALL_CONFIG_FILENAME")
    home_dir: Path = Field(default_factory=Path.home, alias="TWEETWALL_HOME")
    work_dir: Path = Field(default_factory=Path.cwd, alias="TWEETWALL_WORKDIR")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_file: Optional[Path] = Field(default=None, alias="LOG_FILE")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)
