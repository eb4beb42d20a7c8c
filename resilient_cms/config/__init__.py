"""Backend configuration resolution."""

from resilient_cms.config.backend import (
    BackendConfig,
    get_backend_config,
    log_configuration_status,
    resolve_backend_config,
)
from resilient_cms.settings import ImageNaming, RuntimeMode


__all__ = [
    "BackendConfig",
    "ImageNaming",
    "RuntimeMode",
    "get_backend_config",
    "log_configuration_status",
    "resolve_backend_config",
]
