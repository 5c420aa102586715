"""Settings for dapi_client instances."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Forwarded to the close override when close() is called without a delay.
    default_close_delay_seconds: float | None = Field(
        None,
        ge=0,
        validation_alias="DAPI_CLIENT_CLOSE_DELAY_SECONDS",
    )
    log_lifecycle_events: bool = Field(False, validation_alias="DAPI_CLIENT_LOG_LIFECYCLE_EVENTS")
