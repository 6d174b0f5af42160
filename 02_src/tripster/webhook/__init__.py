"""Webhook event handling."""

from .handler import EventHandler, IEventHandler, describe_image

__all__ = ["EventHandler", "IEventHandler", "describe_image"]
