# lambdas/common/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BEDROCK_MODEL = "anthropic.claude-3-sonnet-20240229-v1:0"


class AppSettings(BaseSettings):
    """
    Manages env vars using Pydantic BaseSettings.
    A .env file next to the working directory is read too, which is handy for run_live.py.
    """
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    aws_region: str = Field("us-east-1", alias="AWS_REGION")

    # AppSync (GraphQL) backend
    appsync_endpoint: Optional[str] = Field(None, alias="APPSYNC_ENDPOINT")
    appsync_api_key: Optional[str] = Field(None, alias="APPSYNC_API_KEY")
    appsync_timeout_seconds: float = Field(30.0, alias="APPSYNC_TIMEOUT_SECONDS")

    # Bedrock inference
    bedrock_model: str = Field(DEFAULT_BEDROCK_MODEL, alias="BEDROCK_MODEL")
    max_tokens: int = Field(8192, alias="MAX_TOKENS")
    temperature: float = Field(0.0, alias="TEMPERATURE")

    # Request handler
    prompt_generator_function: Optional[str] = Field(None, alias="PROMPT_GENERATOR_FUNCTION")
    task_distiller_function: Optional[str] = Field(None, alias="TASK_DISTILLER_FUNCTION")
    allowed_origin: str = Field("*", alias="ALLOWED_ORIGIN")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Returns the settings for this process, read once from the environment."""
    return AppSettings()
