"""
Remote API request executor with bounded retry and exponential backoff.

Every call the pipeline makes to the remote service goes through
RequestExecutor:
- Up to ``max_attempts`` attempts per call (default 3)
- ``2^attempt * backoff_base_ms`` milliseconds of backoff after failed attempt n
- A per-attempt timeout long enough for full-table maintenance operations
- One log line per attempt with method, endpoint, attempt and outcome
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from core.exceptions import TransientRemoteError
from schemas.pipeline import CallResult, RetryableCall

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class RequestExecutor:
    """
    Issue remote calls with a bounded number of attempts.

    Attributes:
        client: Shared HTTP client (base URL and default headers set by the caller)
        max_attempts: Attempts per call, numbered 1..max_attempts
        backoff_base_ms: Multiplier for the exponential backoff delay
        timeout: Per-attempt timeout in seconds
        tag: Log prefix, e.g. ``[DAILY]``
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_attempts: int = 3,
        backoff_base_ms: int = 1000,
        timeout: float = 7200.0,
        tag: str = "[DAILY]",
        sleep: Optional[SleepFunc] = None
    ):
        self.client = client
        self.max_attempts = max_attempts
        self.backoff_base_ms = backoff_base_ms
        self.timeout = timeout
        self.tag = tag
        self._sleep = sleep or asyncio.sleep

    def build_call(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None
    ) -> RetryableCall:
        return RetryableCall(
            method=method,
            endpoint=endpoint,
            payload=payload,
            max_attempts=self.max_attempts if max_attempts is None else max_attempts,
            timeout=self.timeout,
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None
    ) -> Any:
        """
        Perform a remote call, retrying on failure.

        Args:
            method: HTTP method
            endpoint: Path relative to the client's base URL (may carry a query string)
            payload: Optional JSON body
            max_attempts: Override for the executor's attempt count

        Returns:
            Decoded response body

        Raises:
            TransientRemoteError: If the last attempt still fails
        """
        call = self.build_call(method, endpoint, payload, max_attempts)

        for attempt in range(1, call.max_attempts + 1):
            logger.info(
                f"{self.tag} Making {call.method} request to {call.endpoint} "
                f"(attempt {attempt}/{call.max_attempts})"
            )

            try:
                response = await self.client.request(
                    call.method,
                    call.endpoint,
                    json=call.payload,
                    timeout=call.timeout
                )
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                error = TransientRemoteError(
                    f"{call.method} {call.endpoint} returned HTTP {status_code}",
                    context={
                        "method": call.method,
                        "endpoint": call.endpoint,
                        "attempts": attempt,
                        "response_body": e.response.text[:500]  # Truncate
                    },
                    original_exception=e,
                    status_code=status_code
                )
                logger.error(
                    f"{self.tag} {call.method} {call.endpoint} failed "
                    f"(attempt {attempt}/{call.max_attempts}): "
                    f"HTTP {status_code} {e.response.text[:500]}"
                )

            except httpx.HTTPError as e:
                # Timeouts, connection failures, protocol errors
                error = TransientRemoteError(
                    str(e) or type(e).__name__,
                    context={
                        "method": call.method,
                        "endpoint": call.endpoint,
                        "attempts": attempt,
                        "timeout": call.timeout
                    },
                    original_exception=e
                )
                logger.error(
                    f"{self.tag} {call.method} {call.endpoint} failed "
                    f"(attempt {attempt}/{call.max_attempts}): {error.message}"
                )

            else:
                logger.info(
                    f"{self.tag} {call.method} {call.endpoint} - Status: {response.status_code}"
                )
                return self._decode(response)

            if attempt == call.max_attempts:
                raise error

            delay_ms = call.backoff_ms(attempt, self.backoff_base_ms)
            logger.info(f"{self.tag} Retrying in {delay_ms}ms...")
            await self._sleep(delay_ms / 1000)

        # Should never reach here, but just in case
        raise TransientRemoteError(
            "Max attempts exceeded",
            context={"method": call.method, "endpoint": call.endpoint}
        )

    async def call(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None
    ) -> CallResult:
        """Like :meth:`request`, but report failure as a ``fatal_error`` result"""
        try:
            data = await self.request(method, endpoint, payload, max_attempts)
        except TransientRemoteError as e:
            return CallResult.fatal(e)
        return CallResult.success(data)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """JSON body, ``None`` for an empty body, raw text otherwise"""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
