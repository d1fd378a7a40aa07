from __future__ import annotations

from typing import Optional


class CodebaseClientError(Exception):
    """Base error for client failures."""


class CodebaseTransportError(CodebaseClientError):
    """Failure while talking to the service."""


class CodebaseNetworkError(CodebaseTransportError):
    """The endpoint could not be reached (DNS, refused connection, timeout)."""


class CodebaseHTTPError(CodebaseTransportError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        body: str = "",
    ):
        super().__init__(f"API error ({status_code}) {method} {url}: {body}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body


class CodebaseDecodeError(CodebaseClientError):
    """
    A present-but-malformed value, or a document with an unexpected shape.
    Absent and empty values never raise this.
    """

    def __init__(
        self,
        *,
        field: Optional[str],
        raw_text: Optional[str],
        reason: str,
    ):
        where = f" in field {field!r}" if field else ""
        detail = f" (got {raw_text!r})" if raw_text is not None else ""
        super().__init__(f"Failed to decode response{where}: {reason}{detail}")
        self.field = field
        self.raw_text = raw_text
        self.reason = reason


__all__ = [
    "CodebaseClientError",
    "CodebaseTransportError",
    "CodebaseNetworkError",
    "CodebaseHTTPError",
    "CodebaseDecodeError",
]
