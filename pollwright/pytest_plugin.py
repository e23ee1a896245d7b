"""
Shared pytest fixtures for UI test suites.

Enable in a suite's ``conftest.py``:

    pytest_plugins = ["pollwright.pytest_plugin"]
"""

import asyncio

import pytest

from pollwright.core.config import PollwrightConfig, element_policy, get_config, reset_config
from pollwright.core.logs import configure_logging
from pollwright.core.policy import RetryPolicy


@pytest.fixture(scope="session")
def pollwright_config() -> PollwrightConfig:
    """Load configuration once per session from .env files and the environment."""
    reset_config()
    config = get_config()
    configure_logging()
    return config


@pytest.fixture
def poll_policy(pollwright_config: PollwrightConfig) -> RetryPolicy:
    """Default element-wait policy for the configured environment."""
    return element_policy(pollwright_config)


@pytest.fixture
def cancel_event() -> asyncio.Event:
    """Cancellation signal a test can set to abort in-flight polls."""
    return asyncio.Event()
