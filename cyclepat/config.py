"""Environment-driven configuration for cyclepat.

Settings are read from ``CYCLEPAT_*`` environment variables:

- ``CYCLEPAT_LOG_LEVEL``: logging level name (default ``WARNING``)
- ``CYCLEPAT_RAND_SCALE``: multiplier applied to an arc midpoint before it
  is truncated into a seed by ``configured_rand`` (default ``1000000``)
- ``CYCLEPAT_SHOW_START`` / ``CYCLEPAT_SHOW_END``: the arc queried when a
  pattern is rendered for inspection (default ``0`` and ``1``)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from fractions import Fraction
from functools import cache
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_RAND_SCALE = 1000000

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"Invalid {name}={value!r}: {reason}")
        self.name = name
        self.value = value


@dataclass(frozen=True)
class Config:
    """Process-level settings.

    Args:
        log_level: Name of the logging level for the package logger
        rand_scale: Seed multiplier for ``rand``
        show_start: Start of the inspection arc
        show_end: End of the inspection arc
    """

    log_level: str = "WARNING"
    rand_scale: int = DEFAULT_RAND_SCALE
    show_start: Fraction = Fraction(0)
    show_end: Fraction = Fraction(1)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> Config:
        """Read the configuration from the environment.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Returns:
            The parsed configuration

        Raises:
            ConfigError: If a variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        log_level = env.get("CYCLEPAT_LOG_LEVEL", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(
                "CYCLEPAT_LOG_LEVEL", log_level, f"expected one of {_LOG_LEVELS}"
            )

        raw_scale = env.get("CYCLEPAT_RAND_SCALE", str(DEFAULT_RAND_SCALE))
        try:
            rand_scale = int(raw_scale)
        except ValueError:
            raise ConfigError("CYCLEPAT_RAND_SCALE", raw_scale, "expected an integer")
        if rand_scale <= 0:
            raise ConfigError("CYCLEPAT_RAND_SCALE", raw_scale, "must be positive")

        show_start = _parse_fraction(env, "CYCLEPAT_SHOW_START", "0")
        show_end = _parse_fraction(env, "CYCLEPAT_SHOW_END", "1")

        config = Config(log_level, rand_scale, show_start, show_end)
        logger.debug("Loaded config %s", config)
        return config


def _parse_fraction(env: Mapping[str, str], name: str, default: str) -> Fraction:
    raw = env.get(name, default)
    try:
        return Fraction(raw)
    except (ValueError, ZeroDivisionError):
        raise ConfigError(name, raw, "expected a number such as 1 or 1/2")


@cache
def get_config() -> Config:
    """Return the process configuration, reading the environment once."""
    return Config.from_env()


def configure_logging(config: Optional[Config] = None) -> None:
    """Configure the ``cyclepat`` logger at the configured level.

    Args:
        config: Configuration to apply, defaults to ``get_config()``
    """
    config = config or get_config()
    logging.basicConfig(level=getattr(logging, config.log_level))
    logging.getLogger("cyclepat").setLevel(getattr(logging, config.log_level))
