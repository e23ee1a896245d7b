"""
Test run configuration management.

Provides configurable timeouts and settings for waits and interactions.
All values can be overridden via environment variables or per-environment
``.env`` files.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .policy import RetryPolicy


logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


@dataclass
class TimeoutConfig:
    """Timeout configuration for different interaction types (milliseconds)."""

    # Element state waits (visible, hidden, enabled, text)
    element: int = 10000

    # Click-with-retry
    click: int = 10000
    click_retries: int = 3
    click_retry_interval: int = 500

    # Page navigation and load states
    navigation: int = 30000

    # HTTP readiness checks
    api: int = 30000

    # Eventual assertions
    assertion: int = 5000

    # Polling configuration
    poll_interval: int = 100  # Default polling interval
    api_poll_interval: int = 1000  # Slower polling for HTTP endpoints

    @classmethod
    def from_env(cls) -> "TimeoutConfig":
        """Create config from environment variables."""
        config = cls()

        # Override with environment variables if present
        env_mappings = {
            "POLLWRIGHT_TIMEOUT_ELEMENT": "element",
            "POLLWRIGHT_TIMEOUT_CLICK": "click",
            "POLLWRIGHT_CLICK_RETRIES": "click_retries",
            "POLLWRIGHT_CLICK_RETRY_INTERVAL": "click_retry_interval",
            "POLLWRIGHT_TIMEOUT_NAVIGATION": "navigation",
            "POLLWRIGHT_TIMEOUT_API": "api",
            "POLLWRIGHT_TIMEOUT_ASSERTION": "assertion",
            "POLLWRIGHT_POLL_INTERVAL": "poll_interval",
            "POLLWRIGHT_API_POLL_INTERVAL": "api_poll_interval",
        }

        for env_var, attr in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    parsed = int(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_var}={value!r}: not an integer")
                    continue
                if parsed < 0:
                    logger.warning(f"Ignoring {env_var}={value!r}: must be non-negative")
                    continue
                setattr(config, attr, parsed)

        return config


@dataclass
class PollwrightConfig:
    """Main test run configuration."""

    # Environment name, selects the .env.<name> file
    test_env: str = "local"

    # Application under test
    base_url: str = "http://localhost:3000"
    api_url: str = "http://localhost:8000"

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    # Timeouts
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)

    @classmethod
    def from_env(cls) -> "PollwrightConfig":
        """Create config from environment variables."""
        return cls(
            test_env=os.getenv("TEST_ENV", "local"),
            base_url=os.getenv("POLLWRIGHT_BASE_URL", "http://localhost:3000"),
            api_url=os.getenv("POLLWRIGHT_API_URL", "http://localhost:8000"),
            debug=os.getenv("POLLWRIGHT_DEBUG", "false").lower() in _TRUTHY,
            log_level=_log_level_from_env("INFO"),
            timeouts=TimeoutConfig.from_env(),
        )


def _log_level_from_env(default: str) -> str:
    value = os.getenv("POLLWRIGHT_LOG_LEVEL")
    if not value:
        return default
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"Ignoring POLLWRIGHT_LOG_LEVEL={value!r}: unknown log level")
        return default
    return level


def env_files(test_env: str, root: Optional[Path] = None) -> List[Path]:
    """Candidate .env files for an environment, highest priority first."""
    root = root or Path.cwd()
    return [
        root / f".env.{test_env}",
        root / ".env.local",
        root / ".env",
    ]


def load_env_files(root: Optional[Path] = None) -> List[Path]:
    """
    Load .env files into the process environment.

    Earlier files win over later ones and variables already present in the
    environment win over every file.

    Returns:
        The files that were loaded
    """
    test_env = os.getenv("TEST_ENV", "local")
    loaded = []
    for env_file in env_files(test_env, root):
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            logger.debug(f"Loaded environment config from: {env_file}")
            loaded.append(env_file)
    return loaded


# Global config instance (lazy loaded)
_config: Optional[PollwrightConfig] = None


def get_config() -> PollwrightConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        load_env_files()
        _config = PollwrightConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    _config = None


# Preset policies for common interaction types
def element_policy(
    config: Optional[PollwrightConfig] = None, timeout_ms: Optional[int] = None
) -> RetryPolicy:
    """Policy for element state waits, optionally with a custom timeout."""
    timeouts = (config or get_config()).timeouts
    return RetryPolicy(
        timeout_ms=timeouts.element if timeout_ms is None else timeout_ms,
        interval_ms=timeouts.poll_interval,
    )


def click_policy(config: Optional[PollwrightConfig] = None) -> RetryPolicy:
    """Policy for click-with-retry: a few spaced attempts within the click timeout."""
    timeouts = (config or get_config()).timeouts
    return RetryPolicy(
        timeout_ms=timeouts.click,
        interval_ms=timeouts.click_retry_interval,
        max_attempts=max(timeouts.click_retries, 1),
    )


def api_policy(
    config: Optional[PollwrightConfig] = None, timeout_ms: Optional[int] = None
) -> RetryPolicy:
    """Policy for HTTP readiness checks."""
    timeouts = (config or get_config()).timeouts
    return RetryPolicy(
        timeout_ms=timeouts.api if timeout_ms is None else timeout_ms,
        interval_ms=timeouts.api_poll_interval,
    )


def assertion_policy(
    config: Optional[PollwrightConfig] = None, timeout_ms: Optional[int] = None
) -> RetryPolicy:
    """Policy for eventual assertions."""
    timeouts = (config or get_config()).timeouts
    return RetryPolicy(
        timeout_ms=timeouts.assertion if timeout_ms is None else timeout_ms,
        interval_ms=timeouts.poll_interval,
    )
