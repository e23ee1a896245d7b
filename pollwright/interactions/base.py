"""
Shared plumbing for page helpers.

Helpers wrap a page object shaped like Playwright's async ``Page``: anything
whose ``locator(selector)`` returns an object with async ``click``, ``fill``,
``is_visible``, ``is_enabled``, ``inner_text``, ``input_value``,
``get_attribute`` and ``count`` methods.
"""

import logging
import re
from typing import Any, Awaitable, Callable, Optional, Union

from pollwright.core.config import PollwrightConfig, element_policy, get_config
from pollwright.core.errors import PollError
from pollwright.core.poller import RetryHook, poll
from pollwright.core.policy import RetryPolicy


logger = logging.getLogger(__name__)

TextPattern = Union[str, re.Pattern]


class ElementStateError(Exception):
    """Element has not reached the awaited state yet."""

    def __init__(self, selector: str, state: str, actual: Any = None) -> None:
        message = f"{selector} is not {state}"
        if actual is not None:
            message += f" (actual: {actual!r})"
        super().__init__(message)
        self.selector = selector
        self.state = state
        self.actual = actual


def text_matches(actual: Optional[str], expected: TextPattern, exact: bool = False) -> bool:
    """Compare element text against a string or compiled regex.

    With ``exact``, strings must equal the stripped text and patterns must
    match all of it.
    """
    if actual is None:
        return False
    if isinstance(expected, re.Pattern):
        if exact:
            return expected.fullmatch(actual.strip()) is not None
        return expected.search(actual) is not None
    if exact:
        return actual.strip() == expected.strip()
    return expected in actual


def describe_pattern(expected: TextPattern) -> str:
    if isinstance(expected, re.Pattern):
        return f"/{expected.pattern}/"
    return repr(expected)


class PageHelper:
    """Base class for helpers that poll against a page."""

    def __init__(self, page: Any, config: Optional[PollwrightConfig] = None):
        """Initialize with a page object and optional configuration."""
        self.page = page
        self.config = config or get_config()

    def element_policy(self, timeout_ms: Optional[int] = None) -> RetryPolicy:
        """Policy for element waits, optionally with a custom timeout."""
        return element_policy(self.config, timeout_ms)

    def _retry_logger(self, description: str) -> RetryHook:
        def on_retry(attempt: int, error: BaseException) -> None:
            logger.debug(f"[{description}] attempt {attempt} not ready: {error}")

        return on_retry

    async def _poll(
        self,
        operation: Callable[[], Awaitable[Any]],
        description: str,
        policy: RetryPolicy,
    ) -> Any:
        """Poll an operation, logging retries and the terminal failure."""
        try:
            return await poll(
                operation,
                policy,
                description=description,
                on_retry=self._retry_logger(description),
            )
        except PollError as e:
            logger.warning(str(e))
            raise
