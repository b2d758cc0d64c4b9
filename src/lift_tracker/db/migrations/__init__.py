"""Migrations that bring stored documents up to the current shape."""

from .normalize import is_legacy_shape, normalize

__all__ = ["is_legacy_shape", "normalize"]
