"""Immutable backend configuration, resolved once per process."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, ValidationError, field_validator

from resilient_cms.config.constants import (
    COMPONENT_CONFIG,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_UPLOADS_DIR,
    DEFAULT_UPLOADS_URL_PREFIX,
    UNCONFIGURED_HINT,
)
from resilient_cms.data_model import StrictBaseModel
from resilient_cms.observability.logging import get_logger
from resilient_cms.observability.redact import redact_url_credentials
from resilient_cms.settings import AppSettings, ImageNaming, RuntimeMode


class BackendConfig(StrictBaseModel):
    """Configuration shared by every CMS component.

    Constructed once and passed to clients and caches. When ``base_url`` is
    missing the system runs in unconfigured mode: fetches return empty
    results without touching the network.

    Attributes:
        base_url: Backend origin, without trailing slash.
        api_token: Static bearer credential.
        mode: Runtime mode of the consuming site.
        debug: Explicit verbosity flag; None derives it from ``mode``.
        request_timeout_seconds: Total deadline for content requests.
        image_timeout_seconds: Timeout for image downloads; None keeps the
            HTTP client default.
        uploads_dir: Local directory mirrored images are written to.
        uploads_url_prefix: Site-relative URL prefix for mirrored images.
        image_naming: Naming strategy for mirrored images.
    """

    base_url: str | None = None
    api_token: str | None = None
    mode: RuntimeMode = RuntimeMode.DEVELOPMENT
    debug: bool | None = None
    request_timeout_seconds: Annotated[float, Field(gt=0)] = (
        DEFAULT_REQUEST_TIMEOUT_SECONDS
    )
    image_timeout_seconds: Annotated[float | None, Field(gt=0)] = None
    uploads_dir: Path = Path(*DEFAULT_UPLOADS_DIR)
    uploads_url_prefix: Annotated[str, Field(min_length=1)] = (
        DEFAULT_UPLOADS_URL_PREFIX
    )
    image_naming: ImageNaming = ImageNaming.BASENAME

    @field_validator("base_url", "api_token", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat empty or whitespace-only values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Drop trailing slashes so paths can be appended directly."""
        if v is None:
            return None
        return v.rstrip("/") or None

    @field_validator("uploads_url_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with ``/`` and has no trailing slash."""
        return "/" + v.strip("/") if v.strip("/") else "/"

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "BackendConfig":
        """Build a configuration from loaded settings.

        Args:
            settings: Environment settings.

        Returns:
            Immutable backend configuration.
        """
        return cls(
            base_url=settings.base_url,
            api_token=settings.api_token,
            mode=settings.mode,
            debug=settings.debug,
            request_timeout_seconds=settings.request_timeout_seconds,
            image_timeout_seconds=settings.image_timeout_seconds,
            uploads_dir=settings.uploads_dir,
            uploads_url_prefix=settings.uploads_url_prefix,
            image_naming=settings.image_naming,
        )

    @property
    def is_configured(self) -> bool:
        """Whether a backend base URL is available."""
        return self.base_url is not None

    @property
    def is_production(self) -> bool:
        """Whether the site is being built for production."""
        return self.mode is RuntimeMode.PRODUCTION

    @property
    def verbose(self) -> bool:
        """Whether failures are logged with full detail."""
        if self.debug is not None:
            return self.debug
        return self.mode is RuntimeMode.DEVELOPMENT

    def summary(self) -> dict[str, object]:
        """Get a loggable summary with credentials removed.

        Returns:
            Dictionary with summary information.
        """
        return {
            "configured": self.is_configured,
            "base_url": redact_url_credentials(self.base_url),
            "has_token": self.api_token is not None,
            "mode": self.mode.value,
            "verbose": self.verbose,
            "uploads_dir": str(self.uploads_dir),
            "image_naming": self.image_naming.value,
        }


def log_configuration_status(config: BackendConfig) -> None:
    """Emit the start-up notice describing the configuration.

    Args:
        config: Resolved backend configuration.
    """
    log = get_logger(COMPONENT_CONFIG)
    if not config.is_configured:
        log.warning(
            "cms_not_configured",
            message="Backend URL not set - using placeholder content",
            hint=UNCONFIGURED_HINT,
        )
        return
    log.info(
        "cms_configured",
        base_url=redact_url_credentials(config.base_url),
        has_token=config.api_token is not None,
        mode=config.mode.value,
    )



def resolve_backend_config() -> BackendConfig:
    """Build a configuration from the environment without caching.

    Settings that cannot form a valid configuration leave the client
    unconfigured instead of raising.

    Returns:
        Backend configuration, unconfigured if the settings were rejected.
    """
    try:
        return BackendConfig.from_settings(AppSettings())
    except ValidationError as e:
        get_logger(COMPONENT_CONFIG).warning(
            "cms_invalid_settings",
            fields=sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
            message="Settings rejected - running without a CMS backend",
        )
        return BackendConfig()


@lru_cache(maxsize=1)
def get_backend_config() -> BackendConfig:
    """Resolve the process-wide configuration from the environment.

    The environment is read on the first call only; later calls return the
    same instance.

    Returns:
        Process-wide backend configuration.
    """
    config = resolve_backend_config()
    log_configuration_status(config)
    return config
