"""
Retry policies and error classification.

A policy is the immutable timing configuration of one poll: how long to keep
trying, how long to pause between attempts, an optional attempt cap, and a
classifier deciding whether a raised error means "not ready yet" or "broken".
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Type


# Type alias for error classifiers: True means "retry"
ErrorClassifier = Callable[[BaseException], bool]


class Retryable(Exception):
    """Marker raised by an operation to force another attempt.

    Usage:
        async def check():
            if not await locator.is_visible():
                raise Retryable(ElementStateError("still hidden"))
    """

    def __init__(self, error: Optional[BaseException] = None) -> None:
        self.error = error if error is not None else self
        super().__init__(str(error) if error is not None else "not ready")


class Fatal(Exception):
    """Marker raised by an operation to stop polling immediately."""

    def __init__(self, error: Optional[BaseException] = None) -> None:
        self.error = error if error is not None else self
        super().__init__(str(error) if error is not None else "fatal")


def retry_any(error: BaseException) -> bool:
    """Default classifier: every ``Exception`` is retryable."""
    return isinstance(error, Exception)


def retry_on(*error_types: Type[BaseException]) -> ErrorClassifier:
    """Build a classifier that retries only the given error types."""

    def classifier(error: BaseException) -> bool:
        return isinstance(error, error_types)

    classifier.__qualname__ = f"retry_on({', '.join(t.__name__ for t in error_types)})"
    return classifier


def fatal_on(*error_types: Type[BaseException]) -> ErrorClassifier:
    """Build a classifier that retries everything except the given error types."""

    def classifier(error: BaseException) -> bool:
        return isinstance(error, Exception) and not isinstance(error, error_types)

    classifier.__qualname__ = f"fatal_on({', '.join(t.__name__ for t in error_types)})"
    return classifier


def unwrap_marker(error: BaseException) -> Tuple[BaseException, Optional[bool]]:
    """Strip a ``Retryable``/``Fatal`` marker.

    Returns the underlying error and the forced verdict, or ``None`` when the
    error carries no marker and the policy classifier should decide.
    """
    if isinstance(error, Fatal):
        return error.error, False
    if isinstance(error, Retryable):
        return error.error, True
    return error, None


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable configuration for one poll invocation."""

    # Total time budget (milliseconds); 0 means a single attempt
    timeout_ms: int = 10000

    # Pause between attempts (milliseconds); 0 means back-to-back
    interval_ms: int = 100

    # Optional cap on the number of attempts
    max_attempts: Optional[int] = None

    # Decides whether a raised error is worth another attempt
    is_retryable: ErrorClassifier = field(default=retry_any, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int):
            raise ValueError(f"timeout_ms must be an integer, got {self.timeout_ms!r}")
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {self.timeout_ms}")
        if isinstance(self.interval_ms, bool) or not isinstance(self.interval_ms, int):
            raise ValueError(f"interval_ms must be an integer, got {self.interval_ms!r}")
        if self.interval_ms < 0:
            raise ValueError(f"interval_ms must be >= 0, got {self.interval_ms}")
        if self.max_attempts is not None and (
            isinstance(self.max_attempts, bool)
            or not isinstance(self.max_attempts, int)
            or self.max_attempts < 1
        ):
            raise ValueError(f"max_attempts must be an integer >= 1, got {self.max_attempts!r}")
        if not callable(self.is_retryable):
            raise ValueError("is_retryable must be callable")

    def with_overrides(self, **changes: Any) -> "RetryPolicy":
        """Return a copy of this policy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def classify(self, error: BaseException) -> Tuple[BaseException, bool]:
        """Resolve markers and the classifier into (underlying error, retryable)."""
        underlying, forced = unwrap_marker(error)
        if forced is not None:
            return underlying, forced
        return underlying, bool(self.is_retryable(underlying))


# Single attempt, no waiting
NO_WAIT = RetryPolicy(timeout_ms=0, interval_ms=0)
