"""KangaAPIClient - public market data over HTTP with retry logic"""

import asyncio
import logging
import random
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from kanga_markets.domain.models import DepthSnapshot, MarketSummary, TradingPair
from kanga_markets.shared.exceptions import TransportError
from kanga_markets.validation import (
    validate_market_depth,
    validate_market_pairs,
    validate_market_summary,
)

STATUS_MESSAGES = {
    400: "Bad Request: Invalid request parameters",
    401: "Unauthorized: Authentication required",
    403: "Forbidden: Access denied",
    404: "Not Found: Resource not available",
    429: "Too Many Requests: Please wait before retrying",
    500: "Server Error: Internal server error",
    502: "Bad Gateway: Server is temporarily unavailable",
    503: "Service Unavailable: Server is temporarily down",
    504: "Gateway Timeout: Server took too long to respond",
}

NETWORK_ERROR_MESSAGE = (
    "Network Error: Unable to reach server. Please check your connection."
)


def status_message(status: int) -> str:
    """User-facing message for an HTTP error status"""
    return STATUS_MESSAGES.get(status, f"Server Error: HTTP {status}")


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


class KangaAPIClient:
    """Async client for the exchange's public market endpoints

    Responsibilities:
    - HTTP request execution
    - Retry with exponential backoff
    - Error normalization into TransportError
    - Payload validation into domain models

    Implements the MarketDataSource protocol.
    """

    DEFAULT_BASE_URL = "https://public.kanga.exchange"
    PAIRS_ENDPOINT = "/api/market/pairs"
    SUMMARY_ENDPOINT = "/api/market/summary"
    DEPTH_ENDPOINT = "/api/market/depth/{ticker_id}"

    BASE_RETRY_DELAY = 1.0
    MAX_RETRY_DELAY = 10.0
    MAX_JITTER = 0.2

    _logging_bridge_installed = False

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize API client

        Args:
            base_url: Exchange base URL
            timeout: Request timeout in seconds
            max_retries: Retries after the first attempt
            http_client: Pre-built client (for testing or external management)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._http_client = http_client
        self._owns_http_client = False
        self.install_logging_bridge()

    @classmethod
    def from_config(cls, config) -> "KangaAPIClient":
        return cls(
            base_url=config.api_base_url,
            timeout=config.api_timeout_seconds,
            max_retries=config.api_retry_attempts,
        )

    @classmethod
    def install_logging_bridge(cls) -> None:
        """Bridge stdlib logging used by httpx into loguru once."""
        if cls._logging_bridge_installed:
            return

        handler = _LoguruHandler()
        std_logger = logging.getLogger("httpx")
        std_logger.setLevel(logging.WARNING)
        std_logger.addHandler(handler)
        std_logger.propagate = False

        cls._logging_bridge_installed = True

    async def __aenter__(self) -> "KangaAPIClient":
        if self._http_client is None:
            self._http_client = self._build_http_client(self.timeout)
            self._owns_http_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it"""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    def _build_http_client(
        self,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an AsyncClient with httpx request/response logging hooks."""
        self.install_logging_bridge()
        return httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        logger.debug(f"HTTPX request: {request.method} {request.url}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Set the HTTP client (for testing or external management)"""
        self._http_client = client
        self._owns_http_client = False

    def _retry_delay(self, retry_count: int) -> float:
        """Exponential backoff: 1s, 2s, 4s... plus up to 200ms jitter, max 10s"""
        delay = (2 ** (retry_count - 1)) * self.BASE_RETRY_DELAY
        jitter = random.random() * self.MAX_JITTER
        return min(delay + jitter, self.MAX_RETRY_DELAY)

    @staticmethod
    def _is_retryable_status(status: int) -> bool:
        return status == 429 or 500 <= status < 600

    async def request(self, endpoint: str) -> Any:
        """GET ``endpoint`` and return the decoded JSON body

        Retry Strategy:
        - Retry on: network errors/timeouts, 5xx, 429
        - Don't retry: other 4xx

        Raises:
            TransportError: If the request fails after all retries
        """
        if self._http_client is None:
            raise TransportError("HTTP client not initialized")

        url = f"{self.base_url}{endpoint}"
        retry_count = 0

        while True:
            logger.debug(f"GET {url} (attempt {retry_count + 1})")
            try:
                response = await self._http_client.get(url)
            except httpx.TransportError as e:
                if retry_count < self.max_retries:
                    retry_count += 1
                    await self._wait_before_retry(retry_count, url, str(e))
                    continue
                logger.error(f"Network error for {url}: {e}")
                raise TransportError(
                    NETWORK_ERROR_MESSAGE, code=type(e).__name__
                ) from e

            status = response.status_code
            if response.is_success:
                try:
                    return response.json()
                except ValueError as e:
                    raise TransportError(
                        "Invalid Response: body is not valid JSON",
                        status=status,
                        details=response.text,
                    ) from e

            if self._is_retryable_status(status) and retry_count < self.max_retries:
                retry_count += 1
                await self._wait_before_retry(retry_count, url, f"HTTP {status}")
                continue

            logger.error(f"Request to {url} failed: {status} - {response.text}")
            raise TransportError(
                status_message(status), status=status, details=response.text
            )

    async def _wait_before_retry(
        self, retry_count: int, url: str, reason: str
    ) -> None:
        delay = self._retry_delay(retry_count)
        logger.warning(
            f"Retry {retry_count}/{self.max_retries} for {url} "
            f"after {delay:.2f}s ({reason})"
        )
        await asyncio.sleep(delay)

    async def fetch_pairs(self) -> list[TradingPair]:
        """Fetch all market trading pairs

        Raises:
            TransportError: On network/HTTP failure
            MarketDataValidationError: If the payload is malformed
        """
        data = await self.request(self.PAIRS_ENDPOINT)
        pairs = validate_market_pairs(data)
        logger.info(f"Fetched {len(pairs)} market pairs")
        return pairs

    async def fetch_summaries(self) -> list[MarketSummary]:
        """Fetch the market summary for all pairs"""
        data = await self.request(self.SUMMARY_ENDPOINT)
        summaries = validate_market_summary(data)
        logger.info(f"Fetched market summary for {len(summaries)} pairs")
        return summaries

    async def fetch_depth(self, ticker_id: str) -> DepthSnapshot:
        """Fetch the order book for one market (e.g. "BTC_USDT")"""
        endpoint = self.DEPTH_ENDPOINT.format(ticker_id=quote(ticker_id, safe=""))
        data = await self.request(endpoint)
        snapshot = validate_market_depth(data, ticker_id)
        logger.info(
            f"Fetched market depth for {ticker_id}: "
            f"{len(snapshot.bids)} bids, {len(snapshot.asks)} asks"
        )
        return snapshot
