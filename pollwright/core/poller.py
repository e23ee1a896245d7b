"""
Retry-until-success polling primitive.

Every wait in the framework (element state, click-with-retry, API readiness,
eventual assertions) is one call into :func:`poll`: an async operation is
attempted on a fixed cadence until it returns, raises a non-retryable error,
or the time/attempt budget in its :class:`RetryPolicy` is spent.
"""

import asyncio
import functools
import inspect
import logging
import time
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Optional,
    TypeVar,
    Union,
)

from .errors import (
    PollAttemptLimitError,
    PollCancelledError,
    PollError,
    PollFatalError,
    PollTimeoutError,
)
from .policy import RetryPolicy


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Type alias for the polled operation
Operation = Callable[[], Awaitable[T]]

# Called with (attempt number, error) after each retryable failure
RetryHook = Callable[[int, BaseException], None]


@dataclass(frozen=True)
class Success(Generic[T]):
    """Attempt returned a value."""

    value: T


@dataclass(frozen=True)
class RetryableFailure:
    """Attempt raised an error that means "not ready yet"."""

    error: BaseException


@dataclass(frozen=True)
class FatalFailure:
    """Attempt raised an error that must not be retried."""

    error: BaseException


AttemptOutcome = Union[Success, RetryableFailure, FatalFailure]


@dataclass
class PollResult(Generic[T]):
    """Successful poll with its diagnostics."""

    value: T
    attempts: int
    elapsed_ms: float


def _failure(policy: RetryPolicy, raised: Exception) -> AttemptOutcome:
    error, retryable = policy.classify(raised)
    if retryable:
        return RetryableFailure(error)
    return FatalFailure(error)


async def _attempt(operation: Operation[T], policy: RetryPolicy) -> AttemptOutcome:
    """Run one attempt and classify what happened.

    Raises:
        TypeError: ``operation`` returned something that cannot be awaited
    """
    try:
        pending = operation()
    except Exception as e:
        return _failure(policy, e)

    if not inspect.isawaitable(pending):
        raise TypeError(
            f"Polled operation must return an awaitable, got {type(pending).__name__}"
        )

    try:
        return Success(await pending)
    except Exception as e:
        return _failure(policy, e)


async def _pause(interval_ms: int, cancel_event: Optional[asyncio.Event]) -> bool:
    """Sleep between attempts. Returns True if cancellation was signalled."""
    if cancel_event is None:
        await asyncio.sleep(interval_ms / 1000)
        return False

    if interval_ms == 0:
        await asyncio.sleep(0)
        return cancel_event.is_set()

    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=interval_ms / 1000)
    except asyncio.TimeoutError:
        return False
    return True


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000


async def poll_result(
    operation: Operation[T],
    policy: Optional[RetryPolicy] = None,
    *,
    description: Optional[str] = None,
    cancel_event: Optional[asyncio.Event] = None,
    on_retry: Optional[RetryHook] = None,
) -> PollResult[T]:
    """
    Poll ``operation`` until it succeeds and report how it went.

    Args:
        operation: Zero-argument async callable; raising means "not yet" or "broken"
        policy: Timing and classification; defaults to ``RetryPolicy()``
        description: What is being waited for, used in error messages
        cancel_event: Setting this event aborts the poll with PollCancelledError
        on_retry: Hook invoked after each retryable failure

    Returns:
        PollResult with the operation's value, attempt count and elapsed time

    Raises:
        PollTimeoutError: Time budget spent without success
        PollAttemptLimitError: Attempt cap reached without success
        PollFatalError: The classifier rejected an error
        PollCancelledError: ``cancel_event`` was set
        TypeError: ``operation`` did not return an awaitable
    """
    if policy is None:
        policy = RetryPolicy()

    started = time.monotonic()
    attempt = 0
    last_error: Optional[BaseException] = None

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise _log_terminal(
                PollCancelledError(
                    attempts=attempt,
                    elapsed_ms=_elapsed_ms(started),
                    last_error=last_error,
                    description=description,
                )
            )

        attempt += 1
        outcome = await _attempt(operation, policy)

        if isinstance(outcome, Success):
            return PollResult(
                value=outcome.value,
                attempts=attempt,
                elapsed_ms=_elapsed_ms(started),
            )

        if isinstance(outcome, FatalFailure):
            raise _log_terminal(
                PollFatalError(
                    attempts=attempt,
                    elapsed_ms=_elapsed_ms(started),
                    last_error=outcome.error,
                    description=description,
                )
            ) from outcome.error

        last_error = outcome.error
        if on_retry is not None:
            on_retry(attempt, last_error)

        # Attempt cap is checked before the clock
        if policy.max_attempts is not None and attempt >= policy.max_attempts:
            raise _log_terminal(
                PollAttemptLimitError(
                    attempts=attempt,
                    elapsed_ms=_elapsed_ms(started),
                    max_attempts=policy.max_attempts,
                    last_error=last_error,
                    description=description,
                )
            ) from last_error

        elapsed = _elapsed_ms(started)
        if elapsed >= policy.timeout_ms:
            raise _log_terminal(
                PollTimeoutError(
                    attempts=attempt,
                    elapsed_ms=elapsed,
                    timeout_ms=policy.timeout_ms,
                    last_error=last_error,
                    description=description,
                )
            ) from last_error

        if await _pause(policy.interval_ms, cancel_event):
            raise _log_terminal(
                PollCancelledError(
                    attempts=attempt,
                    elapsed_ms=_elapsed_ms(started),
                    last_error=last_error,
                    description=description,
                )
            )


async def poll(
    operation: Operation[T],
    policy: Optional[RetryPolicy] = None,
    *,
    description: Optional[str] = None,
    cancel_event: Optional[asyncio.Event] = None,
    on_retry: Optional[RetryHook] = None,
) -> T:
    """
    Poll ``operation`` until it succeeds and return its value.

    Usage:
        text = await poll(
            lambda: locator.inner_text(),
            RetryPolicy(timeout_ms=5000, interval_ms=250),
            description="#status text",
        )

    See :func:`poll_result` for arguments and errors.
    """
    result = await poll_result(
        operation,
        policy,
        description=description,
        cancel_event=cancel_event,
        on_retry=on_retry,
    )
    return result.value


def _log_terminal(error: PollError) -> PollError:
    logger.debug(f"Poll finished with {type(error).__name__}: {error}")
    return error


class RetryPoller:
    """
    Reusable call-site configuration for polls.

    Holds only immutable settings; every :meth:`poll` call is an independent
    execution with its own attempt counter and clock, so one poller can be
    shared by concurrent waits.

    Usage:
        poller = RetryPoller(RetryPolicy(timeout_ms=3000), description="login form")
        form = await poller.poll(lambda: find_form(page))
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        description: Optional[str] = None,
        on_retry: Optional[RetryHook] = None,
    ):
        self.policy = policy or RetryPolicy()
        self.description = description
        self.on_retry = on_retry

    async def poll_result(
        self,
        operation: Operation[T],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> PollResult[T]:
        """Run one poll execution and return its PollResult."""
        return await poll_result(
            operation,
            self.policy,
            description=self.description,
            cancel_event=cancel_event,
            on_retry=self.on_retry,
        )

    async def poll(
        self,
        operation: Operation[T],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> T:
        """Run one poll execution and return the operation's value."""
        result = await self.poll_result(operation, cancel_event=cancel_event)
        return result.value


async def delay(ms: int) -> None:
    """Pause for a fixed number of milliseconds.

    A plain pacing pause; it never retries anything.
    """
    if ms < 0:
        raise ValueError(f"Delay must be non-negative, got {ms}ms")
    await asyncio.sleep(ms / 1000)


def retrying(
    policy: Optional[RetryPolicy] = None,
    description: Optional[str] = None,
) -> Callable:
    """
    Decorator polling an async function with the given policy on every call.

    Usage:
        @retrying(RetryPolicy(max_attempts=3, interval_ms=500))
        async def open_menu(page):
            await page.locator("#menu").click()

        @retrying()
        async def read_banner(page):
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await poll(
                lambda: func(*args, **kwargs),
                policy,
                description=description or func.__name__,
            )

        return wrapper

    return decorator
