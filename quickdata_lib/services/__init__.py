"""Service container and resolver helpers."""

from .container import ServiceContainer

__all__ = ["ServiceContainer"]
