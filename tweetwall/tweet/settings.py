from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..config.converters import ConfigurationConverter
from .models import ResultType


class TwitterSettings(BaseModel):
    """Value of the ``twitter`` configuration key."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bearer_token: Optional[SecretStr] = Field(default=None, alias="bearerToken")
    base_url: str = Field(default="https://api.twitter.com/2", alias="baseUrl")
    timeout: float = 15.0


class LatestImageSettings(BaseModel):
    """Value of the ``latestImage`` configuration key."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    query: str = "JCreteCharity"
    count: int = Field(default=10, ge=1, le=100)
    result_type: ResultType = Field(default=ResultType.recent, alias="resultType")
    refresh_seconds: int = Field(default=10, ge=1, alias="refreshSeconds")


class TwitterSettingsConverter(ConfigurationConverter):
    responsible_key = "twitter"
    data_class = TwitterSettings


class LatestImageSettingsConverter(ConfigurationConverter):
    responsible_key = "latestImage"
    data_class = LatestImageSettings
