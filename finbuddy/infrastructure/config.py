"""
Configuration management using Pydantic Settings.

Values come from the process environment, optionally seeded from a .env file
(python-dotenv) and from an AWS Secrets Manager secret loaded at startup.
get_settings() is cached, so secrets must be loaded before its first call.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    # News providers
    news_api_key: Optional[str] = Field(default=None, description="NewsData.io API key")
    finnhub_api_key: Optional[str] = Field(default=None, description="Finnhub.io API key")
    news_requests_per_hour: float = Field(default=200, gt=0)
    news_fetch_timeout: float = Field(default=30.0, gt=0, description="Seconds per provider call")

    # News window
    database_url: str = Field(default="sqlite:///finbuddy.db")
    max_stored_news: int = Field(default=10, ge=1)
    max_context_news: int = Field(default=3, ge=1)
    store_retry_attempts: int = Field(default=3, ge=0)
    store_retry_delay: float = Field(default=1.0, ge=0)

    # Text generation
    aws_default_region: str = Field(default="us-east-1")
    bedrock_model_id: str = Field(default="us.amazon.nova-pro-v1:0")
    generation_timeout: float = Field(default=25.0, gt=0)
    generation_max_tokens: int = Field(default=500, ge=1)
    generation_temperature: float = Field(default=0.7, ge=0, le=1)

    # Logging / observability
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text", description="'text' or 'json'")
    langfuse_enabled: bool = Field(default=False)
    secret_arn: Optional[str] = Field(default=None, validation_alias="FINBUDDY_SECRET_ARN")

    @field_validator("news_api_key", "finnhub_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings()
