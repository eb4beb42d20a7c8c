"""Redaction helpers so credentials never reach the logs."""

import re


# Headers that must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
        "set-cookie",
        "x-api-key",
        "x-auth-token",
    }
)

REDACTED_VALUE = "[REDACTED]"

_URL_CREDENTIALS = re.compile(r"(https?://)([^:/@]+):([^@/]+)@")


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Args:
        headers: Original headers dictionary.

    Returns:
        New dictionary with sensitive values replaced by ``[REDACTED]``.
    """
    return {
        key: REDACTED_VALUE if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def redact_url_credentials(url: str | None) -> str | None:
    """Mask ``user:password@`` userinfo in a URL.

    Args:
        url: URL that may contain credentials.

    Returns:
        URL with credentials redacted, or None if no URL was given.
    """
    if url is None:
        return None
    return _URL_CREDENTIALS.sub(rf"\1{REDACTED_VALUE}:{REDACTED_VALUE}@", url)
