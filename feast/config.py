from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FEAST_")

    env: Env = Env.local
    log_level: str = "INFO"

    core_model: str = "gpt-4o-mini"
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    request_timeout: float = 60 * 2

    min_query_length: int = Field(3, ge=1)
    max_query_length: int = Field(500, ge=1)
    suggestion_timeout: float | None = None
    enrichment_timeout: float | None = 60
    enrichment_attempts: int = Field(1, ge=1)
    max_concurrent_enrichments: int | None = Field(None, ge=1)
    cancel_superseded: bool = False
