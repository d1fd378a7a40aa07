"""codebase_cli package exports."""

__version__ = "0.1.0"

from .client import (  # noqa: E402
    CodebaseClient,
    CodebaseClientError,
    CodebaseDecodeError,
    CodebaseHTTPError,
    CodebaseNetworkError,
    CodebaseTransportError,
    Connection,
    RetryConfig,
)
from .mapper import decode, decode_list  # noqa: E402

__all__ = [
    "__version__",
    # Client
    "CodebaseClient",
    "Connection",
    "RetryConfig",
    # Exceptions
    "CodebaseClientError",
    "CodebaseTransportError",
    "CodebaseNetworkError",
    "CodebaseHTTPError",
    "CodebaseDecodeError",
    # Decoding
    "decode",
    "decode_list",
]
