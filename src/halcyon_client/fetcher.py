"""HTTP transport used by the endpoint client."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Union

import httpx

from .errors import HalcyonConnectionError
from .multipart import FormData
from .observability import HTTP_FETCH, log_event

RequestBody = Union[str, bytes, FormData, None]

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class Fetcher(Protocol):
    """Performs one HTTP request and returns the (already read) response."""

    async def fetch(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, Optional[str]],
        body: RequestBody = None,
    ) -> httpx.Response: ...


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...


class HttpxFetcher:
    """
    Fetcher backed by httpx.AsyncClient.
    - Handles base URL, bearer auth, timeouts
    - Retries connect failures, and read timeouts for safe methods only;
      HTTP statuses are returned as-is
    - Form bodies are never retried to avoid duplicate uploads
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("halcyon_client.fetcher")

        default_headers: Dict[str, str] = {}
        if access_token:
            default_headers["Authorization"] = f"Bearer {access_token}"

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers=default_headers,
            timeout=timeout_seconds,
            follow_redirects=True,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "HttpxFetcher":
        from .config import load_env_config

        settings = load_env_config()
        if not settings.base_url:
            raise ValueError("Missing HALCYON_BASE_URL in environment.")
        kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
        return cls(
            base_url=settings.base_url,
            access_token=settings.access_token,
            **kwargs,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _build_kwargs(self, headers: Mapping[str, Optional[str]], body: RequestBody):
        kwargs: Dict[str, Any] = {
            "headers": {k: v for k, v in headers.items() if v is not None}
        }
        if isinstance(body, FormData):
            kwargs["files"] = body.to_httpx_files()
        elif body is not None:
            kwargs["content"] = body
        return kwargs

    def _retries_for(self, method: str, body: RequestBody, exc: Exception) -> int:
        # A failed connect never reached the server. After a read timeout it
        # may have acted, so only safe methods are sent again.
        if isinstance(body, FormData):
            return 0
        if isinstance(exc, httpx.ReadTimeout) and method not in SAFE_METHODS:
            return 0
        return self.retry.max_retries

    async def fetch(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, Optional[str]],
        body: RequestBody = None,
    ) -> httpx.Response:
        method = method.upper()
        attempt = 0

        while True:
            start = time.perf_counter()
            try:
                resp = await self.http.request(
                    method, url, **self._build_kwargs(headers, body)
                )
            except (
                httpx.ConnectError,
                httpx.ConnectTimeout,
                httpx.ReadTimeout,
            ) as exc:
                self._log_exception(method, url, exc, start, attempt)
                if attempt < self._retries_for(method, body, exc):
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise HalcyonConnectionError(
                    f"Network/timeout error calling {method} {url}: {exc}"
                ) from exc
            except httpx.HTTPError as exc:
                # Other httpx exceptions (rare) - do not blindly retry
                self._log_exception(method, url, exc, start, attempt)
                raise HalcyonConnectionError(
                    f"HTTPX error calling {method} {url}: {exc}"
                ) from exc

            log_event(
                HTTP_FETCH,
                logger=self.log,
                method=method,
                endpoint=url,
                status=resp.status_code,
                content_type=resp.headers.get("content-type"),
                duration_ms=int((time.perf_counter() - start) * 1000),
                attempt=attempt,
            )
            return resp

    def _log_exception(
        self, method: str, url: str, exc: Exception, start: float, attempt: int
    ) -> None:
        log_event(
            HTTP_FETCH,
            level=logging.WARNING,
            logger=self.log,
            method=method,
            endpoint=url,
            status="exception",
            error_type=type(exc).__name__,
            duration_ms=int((time.perf_counter() - start) * 1000),
            attempt=attempt,
        )


__all__ = ["Fetcher", "HttpxFetcher", "RequestBody", "RetryConfig", "SAFE_METHODS"]
