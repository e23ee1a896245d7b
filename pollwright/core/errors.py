"""Terminal errors raised by the retry poller."""

from typing import Any, Dict, Optional


class PollError(Exception):
    """Base exception for every terminal poll failure.

    Carries the diagnostics a caller needs to report one clear failure
    instead of a stack of repeated driver errors.
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        elapsed_ms: float,
        last_error: Optional[BaseException] = None,
        description: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.attempts = attempts
        self.elapsed_ms = elapsed_ms
        self.last_error = last_error
        self.description = description
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.last_error is not None:
            parts.append(f"last error: {type(self.last_error).__name__}: {self.last_error}")
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class PollTimeoutError(PollError):
    """The time budget ran out before any attempt succeeded."""

    def __init__(
        self,
        attempts: int,
        elapsed_ms: float,
        timeout_ms: int,
        last_error: Optional[BaseException] = None,
        description: Optional[str] = None,
    ) -> None:
        target = description or "operation"
        super().__init__(
            f"Timed out waiting for {target} after {elapsed_ms:.0f}ms "
            f"({attempts} attempts, timeout {timeout_ms}ms)",
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            last_error=last_error,
            description=description,
        )
        self.timeout_ms = timeout_ms


class PollAttemptLimitError(PollError):
    """The attempt cap was reached before any attempt succeeded."""

    def __init__(
        self,
        attempts: int,
        elapsed_ms: float,
        max_attempts: int,
        last_error: Optional[BaseException] = None,
        description: Optional[str] = None,
    ) -> None:
        target = description or "operation"
        super().__init__(
            f"Gave up on {target} after {attempts} of {max_attempts} attempts "
            f"({elapsed_ms:.0f}ms)",
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            last_error=last_error,
            description=description,
        )
        self.max_attempts = max_attempts


class PollFatalError(PollError):
    """An attempt raised an error classified as non-retryable.

    The original error is available as ``last_error`` and is also chained as
    ``__cause__`` by the poller.
    """

    def __init__(
        self,
        attempts: int,
        elapsed_ms: float,
        last_error: BaseException,
        description: Optional[str] = None,
    ) -> None:
        target = description or "operation"
        super().__init__(
            f"Non-retryable failure while waiting for {target} on attempt {attempts}",
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            last_error=last_error,
            description=description,
        )

    @property
    def original(self) -> BaseException:
        """The error raised by the operation."""
        return self.last_error


class PollCancelledError(PollError):
    """The caller's cancellation signal was set while polling."""

    def __init__(
        self,
        attempts: int,
        elapsed_ms: float,
        last_error: Optional[BaseException] = None,
        description: Optional[str] = None,
    ) -> None:
        target = description or "operation"
        super().__init__(
            f"Cancelled while waiting for {target} after {attempts} attempts ({elapsed_ms:.0f}ms)",
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            last_error=last_error,
            description=description,
        )
