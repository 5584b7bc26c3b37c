"""Configuration for the streaming SDK."""

from .constants import DEFAULT_ENDPOINT, PROVIDER_NAME
from .settings import StreamSettings, build_headers, load_settings

__all__ = [
    "DEFAULT_ENDPOINT",
    "PROVIDER_NAME",
    "StreamSettings",
    "build_headers",
    "load_settings",
]
