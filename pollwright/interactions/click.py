"""
Click and fill helpers with retry.

A click that fails (element detached, covered, not yet attached) is retried
a few times with a pause in between; the attempt cap and pause come from
``TimeoutConfig.click_retries`` and ``click_retry_interval``.
"""

from typing import Any, Iterable, Optional

from pollwright.core.config import click_policy
from pollwright.core.errors import PollError
from pollwright.core.poller import delay, poll
from pollwright.core.policy import NO_WAIT, RetryPolicy

from .base import ElementStateError, PageHelper, TextPattern
from .wait import WaitHelper


class ClickHelper(PageHelper):
    """Helper class for click and input interactions."""

    def click_policy(self) -> RetryPolicy:
        """Policy for click-with-retry."""
        return click_policy(self.config)

    async def click(
        self,
        selector: str,
        policy: Optional[RetryPolicy] = None,
        **click_options: Any,
    ) -> None:
        """
        Click element with retry logic.

        Args:
            selector: Element selector
            policy: Override the click policy
            **click_options: Passed through to the driver's ``click``

        Raises:
            PollAttemptLimitError: Every attempt failed; ``last_error`` holds the driver error
        """
        locator = self.page.locator(selector)
        await self._poll(
            lambda: locator.click(**click_options),
            f"click on {selector}",
            policy or self.click_policy(),
        )

    async def click_and_wait_for(
        self,
        selector: str,
        target_selector: str,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """Click element and wait for another element to become visible."""
        await self.click(selector)
        return await WaitHelper(self.page, self.config).wait_for_visible(
            target_selector, timeout_ms=timeout_ms
        )

    async def click_and_wait_for_url(
        self,
        selector: str,
        expected_url: TextPattern,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """Click element and wait for the page URL to match. Returns the URL."""
        await self.click(selector)
        return await WaitHelper(self.page, self.config).wait_for_url(
            expected_url, timeout_ms=timeout_ms
        )

    async def click_if_visible(self, selector: str, **click_options: Any) -> bool:
        """
        Click the element only if it is visible right now.

        Visibility is checked once, without waiting. Errors from the click
        itself still propagate.

        Returns:
            True if the element was clicked
        """
        locator = self.page.locator(selector)

        async def check() -> None:
            if not await locator.is_visible():
                raise ElementStateError(selector, "visible")

        try:
            await poll(check, NO_WAIT, description=f"{selector} to be visible")
        except PollError:
            return False

        await self.click(selector, **click_options)
        return True

    async def click_and_wait_for_hidden(
        self,
        selector: str,
        target_selector: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Click element and wait for another element to disappear."""
        await self.click(selector)
        await WaitHelper(self.page, self.config).wait_for_hidden(
            target_selector, timeout_ms=timeout_ms
        )

    async def click_and_verify(
        self,
        selector: str,
        verification_selector: str,
        timeout_ms: int = 5000,
    ) -> bool:
        """Click element and report whether the verification element appeared."""
        await self.click(selector)
        try:
            await WaitHelper(self.page, self.config).wait_for_visible(
                verification_selector, timeout_ms=timeout_ms
            )
        except PollError:
            return False
        return True

    async def click_multiple(
        self,
        selectors: Iterable[str],
        pause_ms: int = 100,
    ) -> None:
        """Click several elements in order with a fixed pause between clicks."""
        for index, selector in enumerate(selectors):
            if index:
                await delay(pause_ms)
            await self.click(selector)

    async def fill(
        self,
        selector: str,
        value: str,
        policy: Optional[RetryPolicy] = None,
    ) -> None:
        """Fill an input and retry until the input reports the value back."""
        locator = self.page.locator(selector)

        async def attempt() -> None:
            await locator.fill(value)
            actual = await locator.input_value()
            if actual != value:
                raise ElementStateError(selector, f"filled with {value!r}", actual)

        await self._poll(attempt, f"fill {selector}", policy or self.click_policy())
