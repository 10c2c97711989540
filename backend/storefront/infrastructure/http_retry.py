"""Resilient HTTP calls — retry, backoff and error mapping shared by gateway clients.

Invariants:
    - Rate limits (429): backoff, respects Retry-After header (seconds)
    - Transient errors (5xx, connection, timeout): max_retries retries with
      exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to ExternalServiceError (core/errors.py)

Design Decisions:
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
"""

import asyncio
import logging
import random

import httpx

from storefront.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

_RATE_LIMITED = 429


class ResilientHTTPClient:
    """Wraps httpx.AsyncClient with retry logic and error mapping."""

    service: str = "HTTP"

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_retries: int = 2,
        base_delay_ms: int = 500,
        max_delay_ms: int = 8_000,
    ):
        self.client = client
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def request(self, method: str, url: str, **kwargs) -> dict:
        """Send a request and return the decoded JSON body."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                await self._handle_transient_error(str(e) or type(e).__name__, attempt)
                continue

            if response.status_code == _RATE_LIMITED:
                await self._handle_rate_limit(response, attempt)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    f"HTTP {response.status_code}", attempt, response.status_code,
                )
                continue
            if response.status_code >= 400:
                raise ExternalServiceError(
                    self.service, self._error_message(response), response.status_code,
                )
            logger.info(
                f"{self.service} {method} {url} ok",
                extra={
                    "service": self.service, "attempt": attempt + 1,
                    "status_code": response.status_code,
                },
            )
            return self._json(response)
        # only reached with max_retries < 0
        raise ExternalServiceError(self.service, "no attempt made")

    async def aclose(self) -> None:
        await self.client.aclose()

    def _error_message(self, response: httpx.Response) -> str:
        return f"HTTP {response.status_code}"

    def _json(self, response: httpx.Response) -> dict:
        try:
            return response.json()
        except ValueError:
            raise ExternalServiceError(
                self.service, "invalid JSON response", response.status_code,
            )

    async def _handle_rate_limit(self, response: httpx.Response, attempt: int) -> None:
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise ExternalServiceError(
                self.service, "rate limit exceeded after retries", _RATE_LIMITED,
            )
        delay = retry_after_ms if retry_after_ms is not None else self._backoff(attempt)
        logger.warning(
            f"{self.service} rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
            extra={"service": self.service, "attempt": attempt + 1, "status_code": _RATE_LIMITED},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, reason: str, attempt: int, status_code: int | None = None,
    ) -> None:
        if attempt >= self.max_retries:
            raise ExternalServiceError(
                self.service,
                f"transient failure after {self.max_retries} retries: {reason}",
                status_code,
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"{self.service} transient error, retry after {delay}ms: {reason}",
            extra={"service": self.service, "attempt": attempt + 1, "status_code": status_code},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    @staticmethod
    def _extract_retry_after(response: httpx.Response) -> int | None:
        """Retry-After header in milliseconds, if it is a number of seconds."""
        value = response.headers.get("retry-after")
        if value and value.strip().isdigit():
            return int(value) * 1000
        return None
