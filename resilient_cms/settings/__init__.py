"""Application settings loading."""

from .app import AppSettings, ImageNaming, RuntimeMode


__all__ = ["AppSettings", "ImageNaming", "RuntimeMode"]
