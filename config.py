from functools import lru_cache
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Env var names checked for the OpenAI credential, most preferred first.
OPENAI_KEY_ALIASES: Tuple[str, ...] = ("OPENAI_API_KEY", "OPENAI_KEY", "OPENAI")


class Settings(BaseSettings):
    """
    Central configuration for the Lifestyle Score backend.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,   # env var names are case-sensitive
        extra="ignore",
        populate_by_name=True,
    )

    # these will read from ENV and DEBUG in env/system
    env: str = Field(default="local", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")

    # credential aliases; use `openai_credential` to read the effective key
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_key: Optional[str] = Field(default=None, alias="OPENAI_KEY")
    openai: Optional[str] = Field(default=None, alias="OPENAI")

    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_base_url: Optional[str] = Field(default=None, alias="OPENAI_BASE_URL")
    openai_timeout_seconds: float = Field(default=15.0, gt=0, alias="OPENAI_TIMEOUT_SECONDS")

    @property
    def openai_credential(self) -> Optional[str]:
        """First non-empty credential across OPENAI_KEY_ALIASES."""
        for value in (self.openai_api_key, self.openai_key, self.openai):
            if value and value.strip():
                return value.strip()
        return None

    @property
    def is_production(self) -> bool:
        return self.env.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
