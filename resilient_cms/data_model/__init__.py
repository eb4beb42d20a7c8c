"""Shared Pydantic base models."""

from resilient_cms.data_model.base import ContentModel, StrictBaseModel


__all__ = ["ContentModel", "StrictBaseModel"]
