"""logfmt diagnostics for the client and CLI, written to stderr."""

import logging
import sys
from typing import Any, Iterator, Optional, TextIO, Tuple

LOGGER_NAME = "codebase_cli"

# Known extras come first, in this order; any other extra follows sorted.
LOG_EXTRA_FIELDS = (
    "command",
    "method",
    "path",
    "status",
    "attempt",
    "max_retries",
    "backoff_s",
    "duration_ms",
)

_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class LogfmtFormatter(logging.Formatter):
    """One `key=value` line per record; extras are picked up automatically."""

    def format(self, record: logging.LogRecord) -> str:
        pairs: list[Tuple[str, Any]] = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
        ]

        msg = record.getMessage()
        if msg:
            pairs.append(("event", msg))

        pairs.extend(self._extras(record))

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            pairs.append(("exc_type", type(exc).__name__))
            pairs.append(("error", str(exc)))

        return " ".join(f"{key}={self._fmt_val(val)}" for key, val in pairs)

    @staticmethod
    def _extras(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
        extra = {
            key: val
            for key, val in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_") and val is not None
        }
        for key in LOG_EXTRA_FIELDS:
            if key in extra:
                yield key, extra.pop(key)
        for key in sorted(extra):
            yield key, extra[key]

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, bool):
            return "true" if val else "false"
        if isinstance(val, (int, float)):
            return str(val)
        # XML bodies and error texts span lines; keep one record per line.
        s = str(val).replace("\n", "\\n")
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a single logfmt handler to the `codebase_cli` logger.
    Calling it again replaces the handler, so repeated CLI invocations in one
    process don't duplicate lines. stdout is left for command output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
    return handler


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS", "LOGGER_NAME"]
