"""
Core polling infrastructure.

Provides reusable utilities for:
- Retry-until-success polling with explicit policies
- Error classification (retryable vs fatal)
- Configurable timeouts
- Logging setup
"""

from .config import PollwrightConfig, TimeoutConfig, get_config, reset_config
from .errors import (
    PollAttemptLimitError,
    PollCancelledError,
    PollError,
    PollFatalError,
    PollTimeoutError,
)
from .logs import configure_logging
from .poller import PollResult, RetryPoller, delay, poll, poll_result, retrying
from .policy import NO_WAIT, Fatal, Retryable, RetryPolicy, fatal_on, retry_any, retry_on

__all__ = [
    "PollwrightConfig",
    "TimeoutConfig",
    "get_config",
    "reset_config",
    "PollError",
    "PollTimeoutError",
    "PollAttemptLimitError",
    "PollFatalError",
    "PollCancelledError",
    "configure_logging",
    "PollResult",
    "RetryPoller",
    "delay",
    "poll",
    "poll_result",
    "retrying",
    "NO_WAIT",
    "Fatal",
    "Retryable",
    "RetryPolicy",
    "fatal_on",
    "retry_any",
    "retry_on",
]
