"""Application settings loaded from environment variables."""

import re
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from appdoc.utils.exceptions import ConfigurationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    environment: Literal["development", "test", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Document content
    support_email: str | None = None
    signature: str | None = None
    tax_rate: Decimal | None = None

    # Template location used when callers do not pass one
    template_base_uri: str | None = None

    # Metrics
    metrics_enabled: bool = True


class DocumentConfig(BaseModel):
    """Values stamped into every generated application document.

    Attributes:
        support_email: Contact address shown to the applicant.
        signature: Signature block closing the document.
        tax_rate: Multiplier applied to each fund's post-fee value.
    """

    model_config = ConfigDict(frozen=True)

    support_email: str = Field(min_length=3)
    signature: str = Field(min_length=1)
    tax_rate: Decimal = Field(ge=0, allow_inf_nan=False)

    @field_validator("support_email")
    @classmethod
    def validate_support_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("support_email must be an email address")
        return value

    @field_validator("signature")
    @classmethod
    def validate_signature(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("signature must not be blank")
        return value


def load_document_config(settings: Settings | None = None) -> DocumentConfig:
    """Build the document configuration from settings.

    Args:
        settings: Settings to read (default: global settings).

    Returns:
        Validated DocumentConfig.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    if settings is None:
        settings = get_settings()

    missing = [
        name
        for name in ("support_email", "signature", "tax_rate")
        if getattr(settings, name) is None
    ]
    if missing:
        raise ConfigurationError(f"Missing document configuration: {', '.join(missing)}")

    try:
        return DocumentConfig(
            support_email=settings.support_email,
            signature=settings.signature,
            tax_rate=settings.tax_rate,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid document configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
