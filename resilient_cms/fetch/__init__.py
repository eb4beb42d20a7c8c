"""HTTP fetch layer for CMS content with failure isolation.

Provides content fetches that:
- Short-circuit when no backend is configured
- Enforce a hard deadline per request
- Classify HTTP and transport failures into typed errors
- Validate payloads against entity schemas
- Degrade to empty results instead of raising
"""

from resilient_cms.fetch.classify import classify_exception, classify_status
from resilient_cms.fetch.client import CmsClient
from resilient_cms.fetch.http import build_async_client, client_scope
from resilient_cms.fetch.models import ContentOutcome, FetchError, FetchErrorKind


__all__ = [
    # Client
    "CmsClient",
    "build_async_client",
    "client_scope",
    # Models
    "ContentOutcome",
    "FetchError",
    "FetchErrorKind",
    # Classification
    "classify_exception",
    "classify_status",
]
