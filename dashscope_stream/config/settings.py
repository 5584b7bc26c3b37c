"""Environment-driven configuration for the streaming client."""

import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    API_KEY_ENV_VAR,
    CONNECT_TIMEOUT_ENV_VAR,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_ENDPOINT,
    DEFAULT_READ_TIMEOUT,
    ENDPOINT_ENV_VAR,
    READ_TIMEOUT_ENV_VAR,
    STREAM_TIMEOUT_ENV_VAR,
)

logger = logging.getLogger(__name__)


class StreamSettings(BaseModel):
    """Connection settings for the DashScope streaming endpoint."""
    api_key: Optional[str] = Field(None, description="DashScope API key")
    endpoint: str = Field(DEFAULT_ENDPOINT, description="Text-generation endpoint URL")
    connect_timeout: float = Field(DEFAULT_CONNECT_TIMEOUT, gt=0, description="TCP connect timeout (seconds)")
    read_timeout: float = Field(DEFAULT_READ_TIMEOUT, gt=0, description="Max gap between SSE frames (seconds)")
    wait_timeout: Optional[float] = Field(
        None,
        gt=0,
        description="Default deadline for a blocking stream() call; None waits until a terminal signal"
    )


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def load_settings(**overrides) -> StreamSettings:
    """Build settings from the environment (and a .env file, if present).

    Keyword arguments that are not None take precedence over the environment.
    """
    load_dotenv()

    values = {
        "api_key": os.getenv(API_KEY_ENV_VAR),
        "endpoint": os.getenv(ENDPOINT_ENV_VAR) or DEFAULT_ENDPOINT,
        "connect_timeout": _float_env(CONNECT_TIMEOUT_ENV_VAR, DEFAULT_CONNECT_TIMEOUT),
        "read_timeout": _float_env(READ_TIMEOUT_ENV_VAR, DEFAULT_READ_TIMEOUT),
        "wait_timeout": _float_env(STREAM_TIMEOUT_ENV_VAR, None),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return StreamSettings(**values)


def build_headers(api_key: str) -> Dict[str, str]:
    """Authorization and content headers for one request."""
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
