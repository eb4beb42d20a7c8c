"""Schemas for entities returned by the CMS.

The backend wraps every entity as ``{"id": ..., "attributes": {...}}`` and
every relation as ``{"data": <entity or null>}``.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from resilient_cms.data_model import ContentModel


class MediaFormat(ContentModel):
    """One size variant of an uploaded image."""

    url: str
    width: int | None = None
    height: int | None = None


class MediaAsset(ContentModel):
    """Attributes of an uploaded image.

    Width and height are optional because collection queries only expand
    ``url``, ``alternativeText`` and ``formats``.
    """

    url: str
    alternative_text: str | None = None
    width: int | None = None
    height: int | None = None
    formats: dict[str, MediaFormat] = Field(default_factory=dict)

    def variant_url(self, name: str) -> str:
        """Get the URL of a size variant, falling back to the original.

        Args:
            name: Variant name such as ``thumbnail`` or ``medium``.

        Returns:
            URL of the variant if present, else the original URL.
        """
        variant = self.formats.get(name)
        return variant.url if variant else self.url


class MediaEntry(ContentModel):
    """Media entity envelope."""

    id: int
    attributes: MediaAsset


class MediaRelation(ContentModel):
    """Relation to a single media entity."""

    data: MediaEntry | None = None

    @property
    def asset(self) -> MediaAsset | None:
        """The embedded asset, if any."""
        return self.data.attributes if self.data else None

    @property
    def url(self) -> str | None:
        """URL of the embedded asset, if any."""
        return self.data.attributes.url if self.data else None


class CuisineAttributes(ContentModel):
    name: str


class Cuisine(ContentModel):
    id: int
    attributes: CuisineAttributes


class CuisineRelation(ContentModel):
    data: Cuisine | None = None


class ContentEntity(ContentModel):
    """Entity with untyped attributes.

    Useful for endpoints without a dedicated schema.
    """

    id: int
    attributes: dict[str, Any] = Field(default_factory=dict)


class MenuItemAttributes(ContentModel):
    name: str
    description: str = ""
    price: float
    is_made_to_order: bool = False
    image: MediaRelation = Field(default_factory=MediaRelation)
    cuisine: CuisineRelation = Field(default_factory=CuisineRelation)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None


class MenuItem(ContentModel):
    """A dish on the menu."""

    id: int
    attributes: MenuItemAttributes

    @property
    def image_url(self) -> str | None:
        """Raw (possibly relative) URL of the dish image."""
        return self.attributes.image.url

    @property
    def cuisine_name(self) -> str | None:
        """Display name of the related cuisine."""
        cuisine = self.attributes.cuisine.data
        return cuisine.attributes.name if cuisine else None


class HeroSection(ContentModel):
    """Hero banner shown at the top of the homepage."""

    hero_title: str
    hero_subtitle: str = ""
    hero_image: MediaRelation = Field(default_factory=MediaRelation)
    primary_cta_text: str | None = None
    primary_cta_link: str | None = None
    secondary_cta_text: str | None = None
    secondary_cta_link: str | None = None


class HomepageAttributes(ContentModel):
    hero_section: HeroSection | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None


class Homepage(ContentModel):
    """The homepage single-type document."""

    id: int
    attributes: HomepageAttributes

    @property
    def hero_image_url(self) -> str | None:
        """Raw URL of the hero image, if the hero section has one."""
        hero = self.attributes.hero_section
        return hero.hero_image.url if hero else None
