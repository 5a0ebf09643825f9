"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeInt = Annotated[int, Field(ge=0)]


class Settings(BaseSettings):
    """Environment-driven client settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: NonEmptyStr = Field(validation_alias="EXPOSURE_API_KEY")
    api_secret: NonEmptyStr = Field(validation_alias="EXPOSURE_API_SECRET")
    api_base_url: HttpUrl = Field(
        default="https://api.enzoic.com/v1",
        validate_default=True,
        validation_alias="EXPOSURE_API_BASE_URL",
    )
    api_timeout_ms: NonNegativeInt = Field(default=0, validation_alias="EXPOSURE_API_TIMEOUT_MS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache client settings."""

    return Settings()  # type: ignore[call-arg]
