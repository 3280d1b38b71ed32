import json
import logging

import pytest

from brigade.app.middleware import compose
from brigade.core.awaitables import resolved
from brigade.core.errors import ProtocolViolationError
from brigade.infra.logger import JsonFormatter, get_logger


def test_json_formatter_includes_dispatch_fields() -> None:
    record = logging.LogRecord("brigade.test", logging.DEBUG, __file__, 1, "violation at #%d", (2,), None)
    record.position = 2
    record.middleware = "bad_dog"
    record.continuation = "advance"

    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "violation at #2"
    assert payload["level"] == "DEBUG"
    assert payload["position"] == 2
    assert payload["middleware"] == "bad_dog"
    assert payload["continuation"] == "advance"
    assert "brigade" not in payload


def test_get_logger_installs_one_json_handler() -> None:
    logger = get_logger("brigade.test.handlers", logging.DEBUG)
    again = get_logger("brigade.test.handlers")
    assert logger is again
    assert logger.level == logging.WARNING
    assert sum(isinstance(h.formatter, JsonFormatter) for h in logger.handlers) == 1


@pytest.mark.asyncio
async def test_protocol_violation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def bad_dog(request, advance, shortcut):
        shortcut()
        return shortcut()

    caplog.set_level(logging.DEBUG, logger="brigade.app.middleware")
    with pytest.raises(ProtocolViolationError):
        await compose([bad_dog], name="api")({}, lambda: resolved(1), lambda: resolved(2))

    records = [r for r in caplog.records if getattr(r, "middleware", None) == "bad_dog"]
    assert len(records) == 1
    assert records[0].position == 0
    assert records[0].continuation == "shortcut"
    assert records[0].brigade == "api"
