"""
HTTP client utilities with retry support and observability.

Provides the transport used to fetch per-language configuration files:
- Configurable timeouts and concurrency
- Retry with exponential backoff for transient failures
- Clear error taxonomy (NotFoundError, ForbiddenError, RetryableError, PermanentError)
- Relative URLs resolved against a base URL, or read from the local filesystem
- Session lifecycle management
- Structured logging for all operations
"""

import asyncio
import json
import os
import random
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urljoin, urlparse

import aiohttp

from utils.errors import MapConfigError
from utils.logging import get_logger
from utils.types import FetchResponse

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Error Taxonomy
# ---------------------------------------------------------------------------

class FetchError(MapConfigError):
    """Base class for failures fetching a configuration document."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class NotFoundError(FetchError):
    """Raised when a 404 is encountered or a local file does not exist."""


class ForbiddenError(FetchError):
    """Raised when a 403 is encountered (access denied, possible rate limiting)."""


class RetryableError(FetchError):
    """Raised for transient errors that persisted through every retry."""


class PermanentError(FetchError):
    """Raised for errors that should not be retried (bad status, invalid JSON)."""


# ---------------------------------------------------------------------------
# Retry Policy
# ---------------------------------------------------------------------------

@dataclass
class HTTPRetryPolicy:
    """Configuration for HTTP retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True
    # Status codes that trigger retry
    retryable_statuses: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})
    # Methods that are safe to retry
    retryable_methods: frozenset[str] = frozenset({"GET", "HEAD", "PUT", "DELETE", "OPTIONS"})

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number (0-indexed)."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        delay = min(delay, self.max_delay)

        if self.jitter:
            # Add ±25% jitter to prevent thundering herd
            jitter_range = delay * 0.25
            delay += random.uniform(-jitter_range, jitter_range)

        return max(0.1, delay)

    def should_retry(self, status: int, method: str) -> bool:
        """Determine if a request should be retried based on status and method."""
        return status in self.retryable_statuses and method.upper() in self.retryable_methods


# Default policies
DEFAULT_RETRY_POLICY = HTTPRetryPolicy()
NO_RETRY_POLICY = HTTPRetryPolicy(max_attempts=1)


def decode_json_body(text: str, url: str, status: int = 200) -> object:
    """Decode a response body; an empty body decodes to None."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        raise PermanentError(f"Invalid JSON in {url}: {e}", url=url, status=status) from e


class HTTPClient:
    """
    HTTP client with retry support and observability.

    Features:
    - Configurable timeouts and concurrency
    - Optional retry with exponential backoff
    - Structured logging for all requests
    - Clean session lifecycle management
    """

    def __init__(
        self,
        timeout: int = 15,
        concurrency: int = 8,
        user_agent: str | None = None,
        retry_policy: HTTPRetryPolicy | None = None,
        base_url: str | None = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Total request timeout seconds.
            concurrency: Max in-flight requests.
            user_agent: Optional UA string. If not provided a conservative default is used.
            retry_policy: Retry configuration. If None, uses default policy.
                         Set to NO_RETRY_POLICY to disable retries.
            base_url: Base that relative configuration URLs are joined with.
                      Without one, relative URLs are read from the local filesystem.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._sem = asyncio.Semaphore(concurrency)
        self._session: aiohttp.ClientSession | None = None
        self._user_agent = user_agent or "rv-config-loader/1.0"
        self._base_url = base_url

        # Retry configuration (can be overridden via env)
        if retry_policy is None:
            retry_enabled = os.environ.get("HTTP_RETRY_ENABLED", "true").lower() == "true"
            if retry_enabled:
                self._retry_policy = DEFAULT_RETRY_POLICY
            else:
                self._retry_policy = NO_RETRY_POLICY
        else:
            self._retry_policy = retry_policy

        # Track session status for health checks
        self._request_count = 0
        self._error_count = 0
        self._retry_count = 0

    @classmethod
    def from_settings(cls, settings: dict) -> "HTTPClient":
        """Build a client from the ``http`` section of host settings."""
        http_cfg = settings.get("http") or {}
        retry_policy = None
        if "retry_enabled" in http_cfg:
            retry_policy = DEFAULT_RETRY_POLICY if http_cfg["retry_enabled"] else NO_RETRY_POLICY
        return cls(
            timeout=int(http_cfg.get("timeout", 15)),
            concurrency=int(http_cfg.get("concurrency", 8)),
            user_agent=http_cfg.get("user_agent"),
            retry_policy=retry_policy,
            base_url=http_cfg.get("base_url"),
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, raise_for_status=False
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session cleanly."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")

    def get_health_status(self) -> dict:
        """Return health metrics for observability endpoints."""
        return {
            "http_client_status": "ok" if self._session and not self._session.closed else "closed",
            "total_requests": self._request_count,
            "total_errors": self._error_count,
            "total_retries": self._retry_count,
            "retry_enabled": self._retry_policy.max_attempts > 1,
        }

    def resolve_url(self, url: str) -> str:
        """Join relative ``url`` with the configured base URL, if any."""
        if self._base_url and not urlparse(url).scheme:
            return urljoin(self._base_url, url)
        return url

    async def fetch_json(self, url: str, *, retry: bool = True) -> FetchResponse:
        """
        Fetch and decode a JSON document.

        Args:
            url: Absolute http(s) URL, file:// URL, or path relative to the
                base URL (or to the working directory when no base URL is set).
            retry: Whether to use retry policy (default True).

        Returns:
            FetchResponse whose ``data`` is the decoded JSON, or None for an empty body.

        Raises:
            NotFoundError: On 404 or a missing local file.
            ForbiddenError: On 403 or an unreadable local file.
            RetryableError: When transient failures outlast the retry policy.
            PermanentError: On other error statuses or an undecodable body.
        """
        resolved = self.resolve_url(url)
        scheme = urlparse(resolved).scheme.lower()
        if scheme in ("http", "https"):
            return await self._fetch_remote(resolved, retry=retry)
        if scheme in ("", "file"):
            return await self._fetch_local(resolved)
        raise PermanentError(f"Unsupported URL scheme '{scheme}': {resolved}", url=resolved)

    async def _fetch_local(self, url: str) -> FetchResponse:
        parsed = urlparse(url)
        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(url)
        self._request_count += 1
        logger.debug(f"Reading config file {path}")

        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            self._error_count += 1
            raise NotFoundError(f"Config file not found: {path}", url=url, status=404) from e
        except PermissionError as e:
            self._error_count += 1
            raise ForbiddenError(f"Config file not readable: {path}", url=url, status=403) from e
        except (OSError, UnicodeDecodeError) as e:
            self._error_count += 1
            raise PermanentError(f"Could not read {path}: {e}", url=url) from e

        return FetchResponse(url=url, status=200, data=decode_json_body(text, url))

    async def _fetch_remote(self, url: str, *, retry: bool, method: str = "GET") -> FetchResponse:
        policy = self._retry_policy if retry else NO_RETRY_POLICY
        last_error: Exception | None = None
        last_status: int | None = None

        for attempt in range(policy.max_attempts):
            self._request_count += 1

            async with self._sem:
                session = await self._get_session()
                try:
                    logger.debug(f"HTTP {method} {url} (attempt {attempt + 1}/{policy.max_attempts})")

                    async with session.get(
                        url, headers={"User-Agent": self._user_agent, "Accept": "application/json"}
                    ) as resp:
                        status = resp.status
                        last_status = status

                        if status == 200:
                            text = await resp.text()
                            logger.debug(f"HTTP {method} {url} completed ({len(text)} bytes)")
                            return FetchResponse(
                                url=url, status=status, data=decode_json_body(text, url, status)
                            )

                        if status == 404:
                            logger.warning(f"HTTP {method} {url} -> 404 (not found)")
                            self._error_count += 1
                            raise NotFoundError(f"Resource not found: {url}", url=url, status=404)

                        if status == 403:
                            logger.warning(f"HTTP {method} {url} -> 403 (forbidden)")
                            self._error_count += 1
                            raise ForbiddenError(f"Access forbidden: {url}", url=url, status=403)

                        # Check if retryable
                        if policy.should_retry(status, method):
                            self._error_count += 1
                            if attempt < policy.max_attempts - 1:
                                delay = policy.calculate_delay(attempt)

                                # Handle Retry-After header for 429
                                if status == 429:
                                    retry_after = resp.headers.get("Retry-After")
                                    if retry_after:
                                        try:
                                            delay = min(float(retry_after), 60.0)  # Cap at 60s
                                        except ValueError:
                                            pass
                                    logger.info(f"HTTP {method} {url} rate limited; waiting {delay:.1f}s")
                                else:
                                    logger.info(
                                        f"HTTP {method} {url} failed ({status}); "
                                        f"retrying in {delay:.1f}s (attempt {attempt + 1}/{policy.max_attempts})"
                                    )

                                self._retry_count += 1
                                await asyncio.sleep(delay)
                                continue
                            break

                        # Non-retryable error
                        logger.warning(f"HTTP {status} for {url}")
                        self._error_count += 1
                        raise PermanentError(f"HTTP {status} for {url}", url=url, status=status)

                except FetchError:
                    raise
                except TimeoutError as e:
                    last_error = e
                    self._error_count += 1
                    if attempt < policy.max_attempts - 1:
                        delay = policy.calculate_delay(attempt)
                        logger.info(f"Timeout for {url}; retrying in {delay:.1f}s")
                        self._retry_count += 1
                        await asyncio.sleep(delay)
                        continue
                    logger.warning(f"Timeout while fetching {url} (exhausted retries)")
                except aiohttp.ClientError as e:
                    last_error = e
                    self._error_count += 1
                    if attempt < policy.max_attempts - 1:
                        delay = policy.calculate_delay(attempt)
                        logger.info(f"Client error for {url}: {e}; retrying in {delay:.1f}s")
                        self._retry_count += 1
                        await asyncio.sleep(delay)
                        continue
                    logger.warning(f"Client error while fetching {url}: {e}")

        # All retries exhausted
        logger.warning(f"All {policy.max_attempts} attempts failed for {url}")
        error = RetryableError(
            f"Failed to fetch {url} after {policy.max_attempts} attempt(s)",
            url=url,
            status=last_status,
        )
        if last_error:
            raise error from last_error
        raise error
