"""Client for the hosted backend-as-a-service platform."""

from .client import CatalystClient

__all__ = ["CatalystClient"]
