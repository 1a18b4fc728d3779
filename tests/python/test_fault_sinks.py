import logging

from facet_summary.config import RedisFaultSinkConfig
from facet_summary.exceptions import TransportFailureError
from facet_summary.faults import LoggingFaultSink, RedisFaultSink

from facet_fakes import FakeRedis


def test_logging_sink_logs_warning_with_context(caplog) -> None:
    sink = LoggingFaultSink()

    with caplog.at_level(logging.WARNING, logger="facet_summary.faults.sinks"):
        sink.report(TransportFailureError("boom"), context={"round": 3, "target": "os"})

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.WARNING
    assert "round=3 target=os" in record.getMessage()
    assert record.exc_info is not None


def test_redis_sink_appends_capped_fault_record() -> None:
    client = FakeRedis()
    sink = RedisFaultSink(RedisFaultSinkConfig(host="localhost", stream_max_len=50), client=client)

    sink.report(TransportFailureError("boom"), context={"round": 2, "target": None})

    records = sink.recent()
    assert len(records) == 1
    assert records[0]["error_type"] == "TransportFailureError"
    assert records[0]["message"] == "boom"
    assert records[0]["round"] == "2"
    assert records[0]["target"] == ""
    assert records[0]["source"] == "facet-summary"
    assert client.xadd_kwargs == [{"maxlen": 50, "approximate": True}]


def test_redis_sink_returns_most_recent_first() -> None:
    sink = RedisFaultSink(RedisFaultSinkConfig(host="localhost"), client=FakeRedis())

    sink.report(TransportFailureError("first"))
    sink.report(TransportFailureError("second"))

    assert [record["message"] for record in sink.recent(count=1)] == ["second"]


def test_redis_sink_write_failure_is_logged_not_raised(caplog) -> None:
    sink = RedisFaultSink(RedisFaultSinkConfig(host="localhost"), client=FakeRedis(fail=True))

    with caplog.at_level(logging.ERROR, logger="facet_summary.faults.sinks"):
        sink.report(TransportFailureError("boom"))

    assert "fault record write failed" in caplog.text
