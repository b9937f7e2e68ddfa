import json
import logging

from oxr_rates.core.logging import JsonFormatter, RequestIdFilter, request_id_ctx


def make_record(**extra):
    logger = logging.getLogger("oxr_rates.test")
    return logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "rates loaded from %s", ("api",),
        None, extra=extra,
    )


def test_json_formatter_includes_extra_fields():
    record = make_record(source="USD", pairs=2)
    RequestIdFilter().filter(record)
    out = json.loads(JsonFormatter().format(record))
    assert out["message"] == "rates loaded from api"
    assert out["level"] == "INFO"
    assert out["logger"] == "oxr_rates.test"
    assert out["source"] == "USD"
    assert out["pairs"] == 2
    assert out["request_id"] == "-"


def test_request_id_from_context():
    token = request_id_ctx.set("abc")
    try:
        record = make_record()
        RequestIdFilter().filter(record)
    finally:
        request_id_ctx.reset(token)
    assert json.loads(JsonFormatter().format(record))["request_id"] == "abc"
