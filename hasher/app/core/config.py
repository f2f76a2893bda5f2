"""
Configuration for the hasher microservice.

The hasher is stateless; the only tunable is its cross-origin policy.
"""

from typing import Annotated, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    cors_allow_origins: Annotated[
        List[str],
        Field(
            default=["*"],
            description="Origins granted cross-origin access",
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="HASHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )
