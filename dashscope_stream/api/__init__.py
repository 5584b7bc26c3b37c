"""Client API for the streaming SDK."""

from .client import DashScopeClient

__all__ = ["DashScopeClient"]
