"""Structured Logging — verifies JSONFormatter output and setup_logging idempotence."""

import json
import sys
import logging

from customer_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="customer_api.api.routes.customers", level=logging.INFO,
        pathname=__file__, lineno=1, msg="Customer %s", args=("created",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "customer_api.api.routes.customers"
    assert payload["message"] == "Customer created"
    assert "timestamp" in payload


def test_includes_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(customer_id=7, method="POST", status_code=201, password="secret"),
    ))
    assert payload["customer_id"] == 7
    assert payload["method"] == "POST"
    assert payload["status_code"] == 201
    assert "password" not in payload
    assert "address_id" not in payload


def test_includes_exception():
    try:
        raise ValueError("bad row")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad row" in payload["exception"]


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    original_level = root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in root.handlers if h.get_name() == "customer_api"]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h.get_name() == "customer_api"]:
            root.removeHandler(handler)
        root.setLevel(original_level)
