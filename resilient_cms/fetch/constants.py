"""HTTP constants for the fetch layer."""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# All content endpoints live under this path
API_PATH_PREFIX = "/api"

# Expansion for collections: image (url, alt text, size variants) and the
# related cuisine's display name
COLLECTION_POPULATE_PARAMS: tuple[tuple[str, str], ...] = (
    ("populate[image][fields][0]", "url"),
    ("populate[image][fields][1]", "alternativeText"),
    ("populate[image][fields][2]", "formats"),
    ("populate[cuisine][fields][0]", "name"),
)

# Expansion for the homepage: hero section with its embedded image
SINGLE_POPULATE_PARAMS: tuple[tuple[str, str], ...] = (
    ("populate[heroSection][populate]", "heroImage"),
)

DEFAULT_HEADERS = {"Content-Type": "application/json"}
