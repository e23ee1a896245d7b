"""Tests for click and fill helpers."""

import pytest

from pollwright.core.errors import PollAttemptLimitError, PollTimeoutError
from pollwright.interactions.base import ElementStateError
from pollwright.interactions.click import ClickHelper
from tests.fakes import DriverError, FakePage


@pytest.fixture
def clicks(page, fast_config) -> ClickHelper:
    return ClickHelper(page, fast_config)


class TestClick:
    """Tests for click-with-retry."""

    @pytest.mark.asyncio
    async def test_click_succeeds_first_time(self, page, clicks) -> None:
        """Test a clickable element is clicked once."""
        button = page.add("#save")

        await clicks.click("#save")

        assert button.calls == ["click"]

    @pytest.mark.asyncio
    async def test_click_retries_transient_failures(self, page, clicks) -> None:
        """Test a covered element is clicked once it becomes clickable."""
        button = page.add("#save", click_failures=2)

        await clicks.click("#save")

        assert button.calls.count("click") == 3

    @pytest.mark.asyncio
    async def test_click_gives_up_after_configured_retries(self, page, clicks) -> None:
        """Test the click stops after click_retries attempts."""
        button = page.add("#save", click_failures=10)

        with pytest.raises(PollAttemptLimitError) as exc_info:
            await clicks.click("#save")

        assert exc_info.value.attempts == 3
        assert exc_info.value.max_attempts == 3
        assert isinstance(exc_info.value.last_error, DriverError)
        assert button.calls.count("click") == 3

    @pytest.mark.asyncio
    async def test_click_missing_element(self, clicks) -> None:
        """Test clicking an element that never renders."""
        with pytest.raises(PollAttemptLimitError) as exc_info:
            await clicks.click("#ghost")

        assert "No element matches #ghost" in str(exc_info.value)


class TestClickIfVisible:
    """Tests for ClickHelper.click_if_visible."""

    @pytest.mark.asyncio
    async def test_visible_element_is_clicked(self, page, clicks) -> None:
        """Test a visible element is clicked and True is returned."""
        banner = page.add("#cookie-accept")

        assert await clicks.click_if_visible("#cookie-accept") is True
        assert banner.calls == ["is_visible", "click"]

    @pytest.mark.asyncio
    async def test_hidden_element_checked_once(self, page, clicks) -> None:
        """Test a hidden element is checked once without waiting."""
        banner = page.add("#cookie-accept", visible=[False, True])

        assert await clicks.click_if_visible("#cookie-accept") is False
        assert banner.calls == ["is_visible"]

    @pytest.mark.asyncio
    async def test_missing_element(self, clicks) -> None:
        """Test an element that is not rendered is skipped."""
        assert await clicks.click_if_visible("#cookie-accept") is False

    @pytest.mark.asyncio
    async def test_click_errors_propagate(self, page, clicks) -> None:
        """Test a visible element that cannot be clicked still fails loudly."""
        page.add("#cookie-accept", click_failures=10)

        with pytest.raises(PollAttemptLimitError):
            await clicks.click_if_visible("#cookie-accept")


class TestClickPolicy:
    """Tests for the click policy."""

    def test_policy_from_config(self, clicks, fast_config) -> None:
        """Test the click policy follows the configured retries and interval."""
        policy = clicks.click_policy()

        assert policy.max_attempts == fast_config.timeouts.click_retries
        assert policy.interval_ms == fast_config.timeouts.click_retry_interval
        assert policy.timeout_ms == fast_config.timeouts.click


class TestClickAndWait:
    """Tests for composite click helpers."""

    @pytest.mark.asyncio
    async def test_click_and_wait_for(self, page, clicks) -> None:
        """Test the target locator is returned once visible."""
        page.add("#open")
        dialog = page.add("#dialog", visible=[False, True])

        assert await clicks.click_and_wait_for("#open", "#dialog") is dialog

    @pytest.mark.asyncio
    async def test_click_and_wait_for_hidden(self, page, clicks) -> None:
        """Test waiting for an element to close after the click."""
        page.add("#close")
        page.add("#dialog", visible=[True, False])

        await clicks.click_and_wait_for_hidden("#close", "#dialog")

    @pytest.mark.asyncio
    async def test_click_and_verify(self, page, clicks) -> None:
        """Test verification reports True or False instead of raising."""
        page.add("#like")
        page.add("#liked")

        assert await clicks.click_and_verify("#like", "#liked") is True
        assert await clicks.click_and_verify("#like", "#never", timeout_ms=30) is False

    @pytest.mark.asyncio
    async def test_click_and_wait_for_times_out(self, page, clicks) -> None:
        """Test a target that never appears surfaces the timeout."""
        page.add("#open")

        with pytest.raises(PollTimeoutError):
            await clicks.click_and_wait_for("#open", "#dialog", timeout_ms=30)

    @pytest.mark.asyncio
    async def test_click_and_wait_for_url(self, fast_config) -> None:
        """Test the URL is waited for after the click and returned."""
        page = FakePage(url=["/login", "/login", "/dashboard"])
        page.add("#sign-in")

        url = await ClickHelper(page, fast_config).click_and_wait_for_url("#sign-in", "/dashboard")

        assert url == "/dashboard"

    @pytest.mark.asyncio
    async def test_click_and_wait_for_url_times_out(self, fast_config) -> None:
        """Test a URL that never changes surfaces the timeout."""
        page = FakePage(url="/login")
        page.add("#sign-in")

        with pytest.raises(PollTimeoutError):
            await ClickHelper(page, fast_config).click_and_wait_for_url(
                "#sign-in", "/dashboard", timeout_ms=30
            )

    @pytest.mark.asyncio
    async def test_click_multiple(self, page, clicks) -> None:
        """Test elements are clicked in order."""
        first = page.add("#one")
        second = page.add("#two")

        await clicks.click_multiple(["#one", "#two"], pause_ms=1)

        assert first.calls == ["click"]
        assert second.calls == ["click"]


class TestFill:
    """Tests for fill with read-back."""

    @pytest.mark.asyncio
    async def test_fill(self, page, clicks) -> None:
        """Test the value is written and read back."""
        field = page.add("#email")

        await clicks.fill("#email", "user@example.com")

        assert field.value == "user@example.com"
        assert field.calls == ["fill", "input_value"]

    @pytest.mark.asyncio
    async def test_fill_not_sticking(self, page, clicks) -> None:
        """Test a field that rewrites its value exhausts the attempts."""
        field = page.add("#email")

        async def reformat() -> str:
            field.calls.append("input_value")
            return "USER@EXAMPLE.COM"

        field.input_value = reformat

        with pytest.raises(PollAttemptLimitError) as exc_info:
            await clicks.fill("#email", "user@example.com")

        assert isinstance(exc_info.value.last_error, ElementStateError)
        assert exc_info.value.last_error.actual == "USER@EXAMPLE.COM"
