"""Content schemas and result envelopes for CMS responses."""

from resilient_cms.content.models import (
    ContentEntity,
    Cuisine,
    CuisineAttributes,
    CuisineRelation,
    HeroSection,
    Homepage,
    HomepageAttributes,
    MediaAsset,
    MediaEntry,
    MediaFormat,
    MediaRelation,
    MenuItem,
    MenuItemAttributes,
)
from resilient_cms.content.results import (
    CollectionEnvelope,
    CollectionResult,
    Pagination,
    SingletonEnvelope,
    SingletonResult,
    SingletonStatus,
)


__all__ = [
    # Entities
    "ContentEntity",
    "Cuisine",
    "CuisineAttributes",
    "CuisineRelation",
    "HeroSection",
    "Homepage",
    "HomepageAttributes",
    "MenuItem",
    "MenuItemAttributes",
    # Media
    "MediaAsset",
    "MediaEntry",
    "MediaFormat",
    "MediaRelation",
    # Results
    "CollectionEnvelope",
    "CollectionResult",
    "Pagination",
    "SingletonEnvelope",
    "SingletonResult",
    "SingletonStatus",
]
