from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DifySettings(BaseSettings):
    """Connection settings read from ``DIFY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DIFY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    base_url: str = "https://api.dify.ai/v1"
    api_key: SecretStr
