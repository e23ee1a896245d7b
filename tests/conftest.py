"""
Shared pytest fixtures for pollwright tests.

Provides:
- Fast timeout configuration so waits finish in milliseconds
- Fake page driver
- Global config isolation
"""

import pytest

from pollwright.core.config import PollwrightConfig, TimeoutConfig, reset_config
from tests.fakes import FakePage


@pytest.fixture(autouse=True)
def isolated_config():
    """Reset the cached global config around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fast_config() -> PollwrightConfig:
    """Configuration with short timeouts for unit tests."""
    return PollwrightConfig(
        timeouts=TimeoutConfig(
            element=300,
            click=300,
            click_retries=3,
            click_retry_interval=10,
            navigation=300,
            api=300,
            assertion=300,
            poll_interval=10,
            api_poll_interval=10,
        )
    )


@pytest.fixture
def page() -> FakePage:
    """Empty fake page."""
    return FakePage()
