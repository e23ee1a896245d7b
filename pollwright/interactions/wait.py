"""
Element state waits.

Each wait turns one driver query into a poll: the query runs on the
configured cadence and an unmet state raises ``ElementStateError`` (retryable)
until the element gets there or the policy runs out.
"""

from typing import Any, Awaitable, Callable, Optional

from pollwright.core.policy import RetryPolicy

from .base import ElementStateError, PageHelper, TextPattern, describe_pattern, text_matches


class WaitHelper(PageHelper):
    """Helper class for waiting on element and page state."""

    async def wait_for_visible(
        self,
        selector: str,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> Any:
        """
        Wait until the element is visible.

        Args:
            selector: Element selector
            timeout_ms: Override the element timeout
            policy: Full policy override (takes precedence over timeout_ms)

        Returns:
            The element locator
        """
        locator = self.page.locator(selector)

        async def check() -> Any:
            if not await locator.is_visible():
                raise ElementStateError(selector, "visible")
            return locator

        return await self._poll(
            check, f"{selector} to be visible", policy or self.element_policy(timeout_ms)
        )

    async def wait_for_hidden(
        self,
        selector: str,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> None:
        """Wait until the element is hidden or detached."""
        locator = self.page.locator(selector)

        async def check() -> None:
            if await locator.is_visible():
                raise ElementStateError(selector, "hidden")

        await self._poll(
            check, f"{selector} to be hidden", policy or self.element_policy(timeout_ms)
        )

    async def wait_for_enabled(
        self,
        selector: str,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> Any:
        """Wait until the element is visible and enabled. Returns the locator."""
        locator = self.page.locator(selector)

        async def check() -> Any:
            if not await locator.is_visible():
                raise ElementStateError(selector, "visible")
            if not await locator.is_enabled():
                raise ElementStateError(selector, "enabled")
            return locator

        return await self._poll(
            check, f"{selector} to be enabled", policy or self.element_policy(timeout_ms)
        )

    async def wait_for_text(
        self,
        selector: str,
        expected: TextPattern,
        exact: bool = False,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> str:
        """
        Wait until the element's text matches.

        Args:
            selector: Element selector
            expected: Substring (or full text when ``exact``) or compiled regex
            exact: Compare whole text instead of containment
            timeout_ms: Override the element timeout
            policy: Full policy override

        Returns:
            The matching text
        """
        locator = self.page.locator(selector)

        async def check() -> str:
            text = await locator.inner_text()
            if not text_matches(text, expected, exact):
                raise ElementStateError(selector, f"showing text {describe_pattern(expected)}", text)
            return text

        return await self._poll(
            check,
            f"{selector} to show text {describe_pattern(expected)}",
            policy or self.element_policy(timeout_ms),
        )

    async def wait_for_count(
        self,
        selector: str,
        count: int,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> int:
        """Wait until exactly ``count`` elements match the selector."""
        locator = self.page.locator(selector)

        async def check() -> int:
            actual = await locator.count()
            if actual != count:
                raise ElementStateError(selector, f"matched {count} times", actual)
            return actual

        return await self._poll(
            check, f"{count} x {selector}", policy or self.element_policy(timeout_ms)
        )

    async def wait_for_attribute(
        self,
        selector: str,
        name: str,
        value: Optional[str],
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> Optional[str]:
        """Wait until the element's attribute equals ``value`` (None = absent)."""
        locator = self.page.locator(selector)

        async def check() -> Optional[str]:
            actual = await locator.get_attribute(name)
            if actual != value:
                raise ElementStateError(selector, f"having {name}={value!r}", actual)
            return actual

        return await self._poll(
            check, f"{selector}[{name}={value!r}]", policy or self.element_policy(timeout_ms)
        )

    async def wait_for_url(
        self,
        expected: TextPattern,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> str:
        """Wait until the page URL contains ``expected`` (or matches the regex)."""

        async def check() -> str:
            url = self.page.url
            if not text_matches(url, expected):
                raise ElementStateError("page", f"at url {describe_pattern(expected)}", url)
            return url

        if policy is None:
            policy = self.element_policy(
                self.config.timeouts.navigation if timeout_ms is None else timeout_ms
            )
        return await self._poll(check, f"url {describe_pattern(expected)}", policy)

    async def wait_until(
        self,
        predicate: Callable[[], Awaitable[Any]],
        description: str,
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> Any:
        """
        Wait until an async predicate returns a truthy value.

        Usage:
            await waits.wait_until(
                lambda: page.locator(".toast").is_visible(),
                "toast to appear",
            )

        Returns:
            The predicate's truthy value
        """

        async def check() -> Any:
            value = await predicate()
            if not value:
                raise ElementStateError(description, "satisfied", value)
            return value

        return await self._poll(check, description, policy or self.element_policy(timeout_ms))
