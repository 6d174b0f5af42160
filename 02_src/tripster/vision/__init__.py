"""Vision module."""

from .client import GoogleVisionClient, IVisionService

__all__ = ["GoogleVisionClient", "IVisionService"]
