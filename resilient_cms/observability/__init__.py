"""Observability module for logging, metrics, and log redaction."""

from resilient_cms.observability.logging import (
    bind_command_context,
    clear_command_context,
    configure_logging,
    get_logger,
)
from resilient_cms.observability.metrics import CmsMetrics
from resilient_cms.observability.redact import redact_headers, redact_url_credentials


__all__ = [
    "CmsMetrics",
    "bind_command_context",
    "clear_command_context",
    "configure_logging",
    "get_logger",
    "redact_headers",
    "redact_url_credentials",
]
