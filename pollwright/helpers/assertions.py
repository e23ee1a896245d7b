"""
Custom assertions for UI tests.

Provides reusable assertion functions for common validation patterns. Two
failure kinds are kept apart: an element that never became readable ends in
a timeout, while a readable element with the wrong content is an
``AssertionMismatchError``.
"""

from typing import Any, Optional

from pollwright.core.config import assertion_policy
from pollwright.core.policy import RetryPolicy, Retryable, fatal_on
from pollwright.interactions.base import (
    ElementStateError,
    PageHelper,
    TextPattern,
    describe_pattern,
    text_matches,
)
from pollwright.interactions.wait import WaitHelper


class AssertionMismatchError(AssertionError):
    """The element was found, but its content is wrong."""

    def __init__(self, message: str, expected: Any = None, actual: Any = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UIAssertions(PageHelper):
    """Assertions over page elements, built on the retry poller."""

    def assertion_policy(self, timeout_ms: Optional[int] = None) -> RetryPolicy:
        """Policy for assertions; mismatches are never retried."""
        return assertion_policy(self.config, timeout_ms).with_overrides(
            is_retryable=fatal_on(AssertionMismatchError)
        )

    async def _read_text(self, selector: str) -> str:
        locator = self.page.locator(selector)
        if not await locator.is_visible():
            raise ElementStateError(selector, "visible")
        return await locator.inner_text()

    async def assert_text(
        self,
        selector: str,
        expected: TextPattern,
        exact: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """
        Assert element text once the element is readable.

        Args:
            selector: Element selector
            expected: Expected text (or compiled regex)
            exact: Compare whole text instead of containment
            timeout_ms: How long to wait for the element to become readable

        Returns:
            The element text

        Raises:
            PollFatalError: Text did not match; ``last_error`` is the AssertionMismatchError
            PollTimeoutError: Element never became readable
        """

        async def check() -> str:
            text = await self._read_text(selector)
            if not text_matches(text, expected, exact):
                raise AssertionMismatchError(
                    f"Text mismatch for {selector}: expected {describe_pattern(expected)}, "
                    f"got {text!r}",
                    expected=expected,
                    actual=text,
                )
            return text

        return await self._poll(
            check, f"text of {selector}", self.assertion_policy(timeout_ms)
        )

    async def assert_text_eventually(
        self,
        selector: str,
        expected: TextPattern,
        exact: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """
        Assert element text, retrying mismatches until the timeout.

        Raises:
            PollTimeoutError: Text never matched; ``last_error`` is the last mismatch
        """

        async def check() -> str:
            text = await self._read_text(selector)
            if not text_matches(text, expected, exact):
                raise Retryable(
                    AssertionMismatchError(
                        f"Text mismatch for {selector}: expected {describe_pattern(expected)}, "
                        f"got {text!r}",
                        expected=expected,
                        actual=text,
                    )
                )
            return text

        return await self._poll(
            check,
            f"{selector} to show text {describe_pattern(expected)}",
            self.assertion_policy(timeout_ms),
        )

    async def assert_visible(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        """Assert the element becomes visible."""
        await WaitHelper(self.page, self.config).wait_for_visible(
            selector, policy=self.assertion_policy(timeout_ms)
        )

    async def assert_hidden(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        """Assert the element becomes hidden."""
        await WaitHelper(self.page, self.config).wait_for_hidden(
            selector, policy=self.assertion_policy(timeout_ms)
        )

    async def assert_count(
        self, selector: str, expected: int, timeout_ms: Optional[int] = None
    ) -> None:
        """Assert the selector eventually matches exactly ``expected`` elements."""
        await WaitHelper(self.page, self.config).wait_for_count(
            selector, expected, policy=self.assertion_policy(timeout_ms)
        )

    async def assert_value(
        self, selector: str, expected: str, timeout_ms: Optional[int] = None
    ) -> str:
        """Assert an input eventually holds ``expected``."""
        locator = self.page.locator(selector)

        async def check() -> str:
            actual = await locator.input_value()
            if actual != expected:
                raise Retryable(
                    AssertionMismatchError(
                        f"Value mismatch for {selector}: expected {expected!r}, got {actual!r}",
                        expected=expected,
                        actual=actual,
                    )
                )
            return actual

        return await self._poll(
            check, f"value of {selector}", self.assertion_policy(timeout_ms)
        )
