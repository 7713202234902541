"""Configuration schema using Pydantic.

Persisted to ~/.palytt/config.json; every field can also be set through
``PALYTT_*`` environment variables (nested fields use ``__``).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

ENVIRONMENT_URLS: dict[str, str] = {
    "local": "http://127.0.0.1:4000",
    "production": "https://palytt-backend-production-dbbd.up.railway.app",
}


class RetryConfig(BaseModel):
    """Query retry policy. max_attempts=1 disables retries."""
    max_attempts: int = Field(default=1, ge=1)
    backoff_base_seconds: float = Field(default=0.5, ge=0)
    backoff_max_seconds: float = Field(default=8.0, ge=0)


class ClientConfig(BaseSettings):
    """Root configuration for the Palytt RPC client."""
    environment: Literal["local", "production"] = "production"
    base_url: str = ""  # Overrides the environment URL when set
    timeout_seconds: float = Field(default=30.0, gt=0)
    auth_token: str = ""  # Static bearer token (CLI use)
    user_id: str = ""  # Sent as x-clerk-user-id when set
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @property
    def resolved_base_url(self) -> str:
        url = self.base_url.strip() or ENVIRONMENT_URLS[self.environment]
        return url.rstrip("/")

    @property
    def trpc_url(self) -> str:
        return f"{self.resolved_base_url}/trpc"

    @property
    def health_url(self) -> str:
        return f"{self.resolved_base_url}/health"

    model_config = ConfigDict(
        env_prefix="PALYTT_",
        env_nested_delimiter="__"
    )
