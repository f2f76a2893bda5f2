"""
Centralized configuration management for the Notary microservice.

Pydantic v2 settings management: values are parsed from the environment
once at startup, validated strictly, and frozen for the process lifetime.
"""

from typing import Annotated, List

from pydantic import AliasChoices, AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Fails fast at startup if the Digest Service location or the call
    timeout is malformed.
    """

    # ---------------------------------------------------------------------
    # Digest Service (hasher)
    # ---------------------------------------------------------------------

    hasher_service_url: Annotated[
        AnyHttpUrl,
        Field(
            default="http://localhost:8081/hash",
            validation_alias=AliasChoices(
                "NOTARY_HASHER_SERVICE_URL",
                "HASHER_SERVICE_URL",
            ),
            description="Full URL of the Digest Service hash endpoint",
        ),
    ]

    digest_timeout_seconds: Annotated[
        float,
        Field(
            default=10.0,
            gt=0,
            le=120,
            description="Upper bound for a single digest computation call",
        ),
    ]

    # ---------------------------------------------------------------------
    # HTTP surface
    # ---------------------------------------------------------------------

    cors_allow_origins: Annotated[
        List[str],
        Field(
            default=["*"],
            description="Origins granted cross-origin access",
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="NOTARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )
