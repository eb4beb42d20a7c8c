"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_FETCH = "fetch"
COMPONENT_MEDIA = "media"
COMPONENT_CLI = "cli"

# Hard deadline for content requests (seconds)
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0

# Where mirrored images land, and the URL they are served from
DEFAULT_UPLOADS_DIR = ("public", "uploads")
DEFAULT_UPLOADS_URL_PREFIX = "/uploads"

UNCONFIGURED_HINT = (
    "Set CMS_BASE_URL (or PUBLIC_STRAPI_URL) in the environment or .env file "
    "to fetch real content, e.g. CMS_BASE_URL=https://cms.example.com"
)
