import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from .errors import (
    CodebaseClientError,
    CodebaseDecodeError,
    CodebaseHTTPError,
    CodebaseNetworkError,
    CodebaseTransportError,
)

DEFAULT_BASE_URL = "https://api3.codebasehq.com"

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class Connection:
    """Where and as whom to connect. Shared read-only by every request."""

    account: str
    username: str
    api_key: str
    base_url: str = DEFAULT_BASE_URL

    @property
    def auth_username(self) -> str:
        return f"{self.account}/{self.username}"


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 5  # extra attempts after the first request
    initial_backoff_seconds: float = 1.0  # 1, 2, 4, 8, 16...
    # 529 is the service's own "overloaded" status.
    retry_statuses: frozenset[int] = frozenset({429, 503, 529})

    def backoff(self, attempt: int) -> float:
        return self.initial_backoff_seconds * (2**attempt)


class CodebaseClient:
    """
    Shared HTTP client for the Codebase XML API.
    - Handles auth, base URL, content negotiation, timeouts, retries
    - Returns raw response text; decoding is the caller's job (see mapper)
    - No business logic; resource modules own paths and bodies

    Retries cover only responses that actually arrived with a transient
    status (429/503/529). Connection-level failures (DNS, refused
    connection, timeouts) are raised immediately as CodebaseNetworkError and
    are never retried.
    """

    def __init__(
        self,
        connection: Connection,
        *,
        timeout_seconds: float = 30.0,
        retry: Optional[RetryConfig] = None,
        sleep: Optional[Sleep] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (connection.base_url or "").rstrip("/")
        if not base_url:
            raise ValueError("base_url must be provided.")
        if not connection.api_key:
            raise ValueError("api_key must be provided.")

        self.connection = connection
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.sleep = sleep or asyncio.sleep
        self.log = logger or logging.getLogger("codebase_cli.client")

        auth = httpx.BasicAuth(connection.auth_username, connection.api_key)

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            headers={
                "Accept": "application/xml",
                "Content-Type": "application/xml",
            },
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "CodebaseClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}{path}"

    async def _send_once(
        self, method: str, path: str, body: Optional[str]
    ) -> httpx.Response:
        try:
            return await self.http.request(
                method,
                self.url(path),
                content=body.encode("utf-8") if body is not None else None,
            )
        except httpx.TransportError as exc:
            raise CodebaseNetworkError(
                f"Failed to send request {method} {path}: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise CodebaseTransportError(
                f"HTTPX error calling {method} {path}: {exc}"
            ) from exc

    async def send(self, method: str, path: str, body: Optional[str] = None) -> str:
        """
        Core request method.
        - `path` is already interpolated (identifiers and query string)
        - Retries transient statuses with exponential backoff
        - Raises CodebaseHTTPError on a non-2xx final response
        - Raises CodebaseNetworkError if the endpoint cannot be reached
        - Returns the raw response text on success
        """
        method = method.upper()
        start = time.perf_counter()

        attempt = 0
        while True:
            resp = await self._send_once(method, path, body)

            self.log.debug(
                "op.request",
                extra={
                    "method": method,
                    "path": path,
                    "status": resp.status_code,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                    "attempt": attempt,
                },
            )

            if (
                resp.status_code in self.retry.retry_statuses
                and attempt < self.retry.max_retries
            ):
                backoff = self.retry.backoff(attempt)
                self.log.warning(
                    "op.retry",
                    extra={
                        "method": method,
                        "path": path,
                        "status": resp.status_code,
                        "backoff_s": backoff,
                        "attempt": attempt + 1,
                        "max_retries": self.retry.max_retries,
                    },
                )
                await self.sleep(backoff)
                attempt += 1
                continue

            break

        text = resp.text

        if resp.status_code < 200 or resp.status_code >= 300:
            raise CodebaseHTTPError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                body=text,
            )
        return text

    async def get(self, path: str) -> str:
        return await self.send("GET", path)

    async def post(self, path: str, body: str) -> str:
        return await self.send("POST", path, body)

    async def put(self, path: str, body: str) -> str:
        return await self.send("PUT", path, body)

    async def delete(self, path: str) -> str:
        return await self.send("DELETE", path)


__all__ = [
    "CodebaseClient",
    "Connection",
    "RetryConfig",
    "DEFAULT_BASE_URL",
    "CodebaseClientError",
    "CodebaseTransportError",
    "CodebaseNetworkError",
    "CodebaseHTTPError",
    "CodebaseDecodeError",
]
