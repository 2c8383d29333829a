from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from time import perf_counter, sleep
from typing import Callable, Mapping

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

logger = logging.getLogger(__name__)

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2.1 Safari/605.1.15",
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
RSS_ACCEPT = "application/rss+xml, application/xml, text/xml, */*"

ERROR_BODY_LIMIT = 500

# Retrying these cannot change the outcome.
_NON_RETRYABLE = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
    requests.exceptions.TooManyRedirects,
)


def browser_headers(accept: str = HTML_ACCEPT) -> dict[str, str]:
    return {
        "Accept": accept,
        "Accept-Language": "es-ES,es;q=0.8,en-US;q=0.5,en;q=0.3",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Cache-Control": "max-age=0",
    }


class FetchError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: int | None = None,
        reason: str | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.reason = reason
        self.body = body


@dataclass(frozen=True)
class RawDocument:
    url: str
    status_code: int
    content: bytes
    elapsed: float


class HttpFetcher:
    """GET with browser-like headers, a rotating User-Agent and whole-request retries."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        max_redirects: int = 5,
        verify_tls: bool = False,
        session: requests.Session | None = None,
        rng: Random | None = None,
        sleeper: Callable[[float], None] = sleep,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")

        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self.verify_tls = verify_tls
        if not verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)
        self._session = session or requests.Session()
        self._session.max_redirects = max_redirects
        self._rng = rng or Random()
        self._sleep = sleeper

    def pick_user_agent(self) -> str:
        return self._rng.choice(USER_AGENTS)

    def fetch(self, url: str, *, headers: Mapping[str, str] | None = None) -> RawDocument:
        attempts = self.max_retries + 1
        last_error: FetchError | None = None
        last_cause: Exception | None = None

        for attempt in range(1, attempts + 1):
            request_headers = {**browser_headers(), **(headers or {}), "User-Agent": self.pick_user_agent()}
            started = perf_counter()
            try:
                response = self._get(url, request_headers)
            except _NON_RETRYABLE as exc:
                logger.error("GET %s rejected without retry: %s", url, exc)
                raise FetchError(f"Invalid request for {url}: {exc}", url=url) from exc
            except requests.RequestException as exc:
                elapsed = perf_counter() - started
                logger.warning(
                    "GET %s attempt=%d/%d failed elapsed=%.3fs error=%s",
                    url,
                    attempt,
                    attempts,
                    elapsed,
                    exc,
                )
                last_error = FetchError(f"Request to {url} failed: {exc}", url=url)
                last_cause = exc
            else:
                elapsed = perf_counter() - started
                content = response.content or b""
                logger.info(
                    "GET %s attempt=%d/%d status=%s elapsed=%.3fs bytes=%d",
                    url,
                    attempt,
                    attempts,
                    response.status_code,
                    elapsed,
                    len(content),
                )
                if 200 <= response.status_code < 300:
                    return RawDocument(url=url, status_code=response.status_code, content=content, elapsed=elapsed)
                last_error = FetchError(
                    f"Error HTTP: {response.status_code} - {response.reason}",
                    url=url,
                    status=response.status_code,
                    reason=response.reason,
                    body=(response.text or "")[:ERROR_BODY_LIMIT],
                )
                last_cause = None

            if attempt < attempts:
                self._sleep(self.retry_delay_seconds)

        assert last_error is not None
        logger.error(
            "GET %s gave up after %d attempts status=%s body=%r",
            url,
            attempts,
            last_error.status,
            last_error.body,
        )
        raise last_error from last_cause

    def _get(self, url: str, headers: Mapping[str, str]) -> requests.Response:
        return self._session.get(url, headers=dict(headers), timeout=self.timeout, verify=self.verify_tls)


__all__ = [
    "ERROR_BODY_LIMIT",
    "FetchError",
    "HTML_ACCEPT",
    "HttpFetcher",
    "RSS_ACCEPT",
    "RawDocument",
    "USER_AGENTS",
    "browser_headers",
]
