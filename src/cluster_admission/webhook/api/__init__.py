"""Webhook API routers."""

from . import admission, health

__all__ = ["admission", "health"]
