"""Application settings powered by Pydantic BaseSettings."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from resilient_cms.observability.logging import get_logger


class RuntimeMode(str, Enum):
    """Build/runtime mode of the consuming site."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ImageNaming(str, Enum):
    """How cached images are named in the uploads directory.

    - BASENAME: keep the final URL path segment (``plate.jpg``)
    - HASHED: prefix the segment with a digest of the source URL
    """

    BASENAME = "basename"
    HASHED = "hashed"


_MODE_ALIASES = {
    "dev": RuntimeMode.DEVELOPMENT.value,
    "prod": RuntimeMode.PRODUCTION.value,
}


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CMS_BASE_URL", "PUBLIC_STRAPI_URL"),
    )
    api_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CMS_API_TOKEN", "STRAPI_API_TOKEN"),
    )
    mode: RuntimeMode = Field(
        default=RuntimeMode.DEVELOPMENT,
        validation_alias=AliasChoices("CMS_MODE", "MODE"),
    )
    debug: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("CMS_DEBUG", "DEBUG"),
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias="CMS_REQUEST_TIMEOUT_SECONDS",
    )
    image_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias="CMS_IMAGE_TIMEOUT_SECONDS",
    )
    uploads_dir: Path = Field(
        default=Path("public") / "uploads",
        validation_alias="CMS_UPLOADS_DIR",
    )
    uploads_url_prefix: str = Field(
        default="/uploads",
        min_length=1,
        validation_alias="CMS_UPLOADS_URL_PREFIX",
    )
    image_naming: ImageNaming = Field(
        default=ImageNaming.BASENAME,
        validation_alias="CMS_IMAGE_NAMING",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: object) -> object:
        """Accept ``dev``/``prod`` shorthands in any case."""
        if isinstance(v, str):
            lowered = v.strip().lower()
            return _MODE_ALIASES.get(lowered, lowered)
        return v

    @field_validator("*", mode="wrap")
    @classmethod
    def default_when_invalid(
        cls,
        v: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        """Replace an invalid value with the field default.

        Generic variables such as ``MODE`` and ``DEBUG`` may hold values
        meant for other build tools, e.g. ``MODE=test`` or ``DEBUG=express:*``.
        """
        try:
            return handler(v)
        except ValidationError as e:
            field_name = info.field_name or ""
            default = cls.model_fields[field_name].get_default(
                call_default_factory=True
            )
            get_logger("settings").warning(
                "cms_invalid_settings",
                field=field_name,
                error=e.errors()[0]["msg"],
                message="Ignoring invalid value and using the default",
            )
            return default
