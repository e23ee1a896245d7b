"""
HTTP readiness waits.

Used by UI suites to wait for the backend under test before driving the
browser, or to wait for a side effect of a UI action to show up in the API.
Transport errors and transient statuses are retried; any other unexpected
status ends the wait immediately.
"""

import logging
from typing import Any, Callable, Optional

import httpx

from pollwright.core.config import PollwrightConfig, api_policy, get_config
from pollwright.core.errors import PollError
from pollwright.core.poller import poll
from pollwright.core.policy import Fatal, RetryPolicy, retry_on


logger = logging.getLogger(__name__)

# HTTP status codes to retry on
RETRYABLE_STATUSES = frozenset(
    {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }
)

# Exception types to retry on
RETRYABLE_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.RemoteProtocolError,
    ConnectionError,
    TimeoutError,
)


class ResponseNotReadyError(Exception):
    """Endpoint answered, but not with what is being waited for yet."""

    def __init__(self, message: str, response: Optional[httpx.Response] = None) -> None:
        super().__init__(message)
        self.response = response


class UnexpectedStatusError(Exception):
    """Endpoint answered with a status that will not change by waiting."""

    def __init__(self, response: httpx.Response, expected_status: int) -> None:
        super().__init__(
            f"Expected {expected_status}, got {response.status_code}: {response.text[:200]}"
        )
        self.response = response
        self.status_code = response.status_code
        self.expected_status = expected_status


def should_retry_status(status_code: int, retry_on_5xx: bool = True) -> bool:
    """Check if we should retry based on the HTTP status."""
    if status_code in RETRYABLE_STATUSES:
        return True
    return retry_on_5xx and 500 <= status_code < 600


is_retryable_http_error = retry_on(*RETRYABLE_TRANSPORT_ERRORS, ResponseNotReadyError)


class ApiWaitHelper:
    """Helper class for polling HTTP endpoints."""

    def __init__(self, client: httpx.AsyncClient, config: Optional[PollwrightConfig] = None):
        """Initialize with HTTP client."""
        self.client = client
        self.config = config or get_config()

    def api_policy(self, timeout_ms: Optional[int] = None) -> RetryPolicy:
        """Policy for HTTP waits: transport errors and transient statuses retry."""
        return api_policy(self.config, timeout_ms).with_overrides(
            is_retryable=is_retryable_http_error
        )

    async def _poll(self, operation: Callable, description: str, policy: RetryPolicy) -> Any:
        def on_retry(attempt: int, error: BaseException) -> None:
            logger.debug(f"[{description}] attempt {attempt}: {type(error).__name__}: {error}")

        try:
            return await poll(operation, policy, description=description, on_retry=on_retry)
        except PollError as e:
            logger.warning(str(e))
            raise

    async def _request(
        self,
        method: str,
        path: str,
        expected_status: int,
        **request_kwargs: Any,
    ) -> httpx.Response:
        response = await self.client.request(method, path, **request_kwargs)
        if response.status_code == expected_status:
            return response
        if should_retry_status(response.status_code):
            raise ResponseNotReadyError(
                f"{method} {path} returned {response.status_code}", response=response
            )
        raise Fatal(UnexpectedStatusError(response, expected_status))

    async def wait_for_status(
        self,
        path: str,
        expected_status: int = 200,
        method: str = "GET",
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
        **request_kwargs: Any,
    ) -> httpx.Response:
        """
        Poll an endpoint until it answers with ``expected_status``.

        Args:
            path: URL or path relative to the client's base_url
            expected_status: Status code to wait for
            method: HTTP method
            timeout_ms: Override the API timeout
            policy: Full policy override
            **request_kwargs: Passed to ``client.request``

        Returns:
            The first response with the expected status

        Raises:
            PollFatalError: Endpoint answered with a non-transient unexpected status
            PollTimeoutError: Endpoint never became ready
        """
        return await self._poll(
            lambda: self._request(method, path, expected_status, **request_kwargs),
            f"{method} {path} -> {expected_status}",
            policy or self.api_policy(timeout_ms),
        )

    async def wait_for_json(
        self,
        path: str,
        predicate: Callable[[Any], bool],
        timeout_ms: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
        **request_kwargs: Any,
    ) -> Any:
        """
        Poll a JSON endpoint until its body satisfies ``predicate``.

        Usage:
            job = await api.wait_for_json(
                f"/jobs/{job_id}",
                lambda body: body["status"] == "COMPLETED",
            )

        Returns:
            The decoded JSON body that satisfied the predicate
        """

        async def check() -> Any:
            response = await self._request("GET", path, 200, **request_kwargs)
            data = response.json()
            if not predicate(data):
                raise ResponseNotReadyError(f"GET {path} body not ready", response=response)
            return data

        return await self._poll(check, f"GET {path} body", policy or self.api_policy(timeout_ms))
