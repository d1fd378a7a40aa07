import io
import logging

import pytest
from codebase_cli.core.logging import LOGGER_NAME, LogfmtFormatter, setup_logging


def _record(msg, exc_info=None, **extra):
    record = logging.LogRecord(
        name="codebase_cli.client",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:], logger.level, logger.propagate = saved


def test_known_extras_come_first_in_fixed_order():
    line = LogfmtFormatter().format(
        _record("op.retry", backoff_s=2.0, status=503, max_retries=5, attempt=2)
    )

    assert line == (
        "level=warning logger=codebase_cli.client event=op.retry "
        "status=503 attempt=2 max_retries=5 backoff_s=2.0"
    )


def test_unknown_extras_follow_sorted():
    line = LogfmtFormatter().format(_record("x", zeta=1, alpha="a", status=200))

    assert line.endswith("event=x status=200 alpha=a zeta=1")


def test_values_with_spaces_or_newlines_are_quoted_on_one_line():
    line = LogfmtFormatter().format(
        _record("op.request", path="/p/tickets?query=a b", body="<a>\n</a>")
    )

    assert 'path="/p/tickets?query=a b"' in line
    assert "body=<a>\\n</a>" in line
    assert "\n" not in line


def test_none_extras_and_bools():
    line = LogfmtFormatter().format(_record("hello", status=None, cached=True))

    assert line == "level=warning logger=codebase_cli.client event=hello cached=true"


def test_exception_details_are_included():
    try:
        raise ValueError("bad value")
    except ValueError as exc:
        record = _record("command.failed", exc_info=(type(exc), exc, exc.__traceback__))

    line = LogfmtFormatter().format(record)

    assert 'exc_type=ValueError error="bad value"' in line


def test_setup_logging_replaces_handler(package_logger):
    setup_logging("DEBUG")
    stream = io.StringIO()
    setup_logging("DEBUG", stream=stream)

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG

    logging.getLogger("codebase_cli.client").debug("op.request", extra={"status": 200})

    assert stream.getvalue() == (
        "level=debug logger=codebase_cli.client event=op.request status=200\n"
    )


def test_setup_logging_level_filters(package_logger):
    stream = io.StringIO()
    setup_logging("WARNING", stream=stream)

    logging.getLogger("codebase_cli.client").info("quiet")

    assert stream.getvalue() == ""
