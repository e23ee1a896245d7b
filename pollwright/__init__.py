"""
Waiting layer for end-to-end UI tests.

Every wait, click-with-retry and eventual assertion goes through one polling
primitive, :func:`pollwright.core.poll`, configured by an explicit
:class:`pollwright.core.RetryPolicy`.
"""

from .__about__ import __version__
from .core import (
    NO_WAIT,
    Fatal,
    PollAttemptLimitError,
    PollCancelledError,
    PollError,
    PollFatalError,
    PollResult,
    PollTimeoutError,
    Retryable,
    RetryPoller,
    RetryPolicy,
    delay,
    fatal_on,
    poll,
    poll_result,
    retry_any,
    retry_on,
    retrying,
)

__all__ = [
    "__version__",
    "NO_WAIT",
    "Fatal",
    "PollAttemptLimitError",
    "PollCancelledError",
    "PollError",
    "PollFatalError",
    "PollResult",
    "PollTimeoutError",
    "Retryable",
    "RetryPoller",
    "RetryPolicy",
    "delay",
    "fatal_on",
    "poll",
    "poll_result",
    "retry_any",
    "retry_on",
    "retrying",
]
