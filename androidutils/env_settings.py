"""Environment driven settings.

Values are read from ``ANDROIDUTILS_*`` environment variables after an
optional ``.env`` file has been loaded with python-dotenv.  Consumers
normally call :func:`get_settings`, which caches the first successful
load; tests can call ``get_settings.cache_clear()`` to force a reload.
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ANDROIDUTILS_"

# Timeouts used by the HTTP helpers, in seconds.
DEFAULT_CONNECT_TIMEOUT = 15.0
DEFAULT_READ_TIMEOUT = 20.0
DEFAULT_NET_SYSFS_ROOT = "/sys/class/net"


class Settings(BaseModel):
    """Tunable values shared by the helper modules."""

    connect_timeout: float = Field(DEFAULT_CONNECT_TIMEOUT, gt=0)
    read_timeout: float = Field(DEFAULT_READ_TIMEOUT, gt=0)
    task_pool_workers: Optional[int] = Field(None, gt=0)
    external_storage: Optional[str] = None
    net_sysfs_root: str = DEFAULT_NET_SYSFS_ROOT
    sdk_int_override: Optional[int] = Field(None, gt=0)

    @property
    def timeout(self):
        """``(connect, read)`` tuple in the form requests expects."""
        return (self.connect_timeout, self.read_timeout)


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build a :class:`Settings` from ``.env`` and the process environment.

    Only variables that are actually set are passed on, so unset ones
    keep their defaults.  Raises :class:`ConfigurationError` when a value
    does not validate.
    """
    if not load_dotenv(dotenv_path):
        logger.debug("No .env file found or could not be loaded.")

    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None and raw != "":
            values[name] = raw

    try:
        settings = Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid androidutils settings: {e}") from e

    logger.debug("Loaded settings: %s", settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "Settings",
    "load_settings",
    "get_settings",
]
