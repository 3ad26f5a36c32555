from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables.

    Credentials are required (no defaults) to avoid unsafe assumptions.
    """

    model_config = SettingsConfigDict(env_prefix="DGS_", case_sensitive=False)

    api_url: AnyHttpUrl = Field(
        "https://api.digisign.digital.cz",
        description="DigiSign API base URL (staging: https://api.staging.digisign.digital.cz)",
    )
    access_key: str = Field(..., min_length=1, description="API access key id")
    secret_key: str = Field(..., min_length=1, description="API secret key")

    http_timeout_s: float = Field(30.0, ge=1.0, le=300.0, description="HTTP timeout (seconds)")
    max_retries: int = Field(5, ge=1, le=10, description="Attempts for transient failures (429, 5xx, network)")

    def base_url(self) -> str:
        return str(self.api_url).rstrip("/")
