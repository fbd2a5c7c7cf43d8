"""
Environment Configuration
Handles environment-specific settings (dev, prod, test).
"""

import os
from dataclasses import dataclass
from enum import Enum

ENV_VAR = "REFKEEPER_ENV"


class Environment(str, Enum):
    """Application environment modes."""
    DEVELOPMENT = "dev"
    PRODUCTION = "prod"
    TEST = "test"


@dataclass(frozen=True)
class EnvironmentConfig:
    """Environment-specific configuration."""

    log_level: str = "INFO"
    # Persist settings changes made while running
    persist_settings: bool = True


_CONFIGS = {
    Environment.DEVELOPMENT: EnvironmentConfig(
        log_level="DEBUG",
    ),
    Environment.PRODUCTION: EnvironmentConfig(
        log_level="WARNING",
    ),
    Environment.TEST: EnvironmentConfig(
        log_level="DEBUG",
        persist_settings=False,
    ),
}


def get_environment() -> Environment:
    """
    Get the current environment from the REFKEEPER_ENV variable.

    Returns:
        Environment enum value, defaults to PRODUCTION
    """
    env_str = os.environ.get(ENV_VAR, "prod").lower()
    try:
        return Environment(env_str)
    except ValueError:
        return Environment.PRODUCTION


def get_config() -> EnvironmentConfig:
    """Get the configuration for the current environment."""
    return _CONFIGS.get(get_environment(), _CONFIGS[Environment.PRODUCTION])
