import logging

import pytest

from azerothcore_ah.infrastructure.observability import (Timer,
                                                         format_prometheus,
                                                         increment_counter,
                                                         log_context,
                                                         record_api_request)
from azerothcore_ah.infrastructure.observability.logging import (
    ContextualFormatter, parse_level)
from azerothcore_ah.infrastructure.observability.metrics import MetricRegistry


def test_counter_labels_are_order_independent():
    registry = MetricRegistry()
    counter = registry.counter("hits")

    counter.inc(labels={"a": "1", "b": "2"})
    counter.inc(2, labels={"b": "2", "a": "1"})

    assert counter.get({"a": "1", "b": "2"}) == 3
    assert counter.get({"a": "9"}) == 0


def test_histogram_stats():
    registry = MetricRegistry()
    histogram = registry.histogram("latency")

    histogram.observe(1.0)
    histogram.observe(3.0)

    assert histogram.get_stats() == {"count": 2, "sum": 4.0, "avg": 2.0}
    assert registry.histogram("empty").get_stats()["count"] == 0


def test_prometheus_export_includes_recorded_request():
    record_api_request("/api/test-export", "GET", 200, 0.25)
    increment_counter("plain_total", help_text="Unlabelled counter")
    with Timer("timed_block_seconds"):
        pass

    text = format_prometheus()

    assert "# TYPE api_requests_total counter" in text
    assert 'api_requests_total{endpoint="/api/test-export",method="GET",status="200"}' in text
    assert 'api_request_duration_seconds_count{endpoint="/api/test-export",method="GET"} 1' in text
    assert "plain_total " in text
    assert "timed_block_seconds_count 1" in text


def test_log_context_appends_fields():
    formatter = ContextualFormatter("%(message)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "Running search", None, None)

    with log_context(endpoint="/api/search", term="linen"):
        rendered = formatter.format(record)

    assert rendered == "Running search [endpoint=/api/search term=linen]"


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    assert parse_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        parse_level("loud")


def test_histogram_keeps_totals_not_observations():
    histogram = MetricRegistry().histogram("latency")

    for _ in range(1000):
        histogram.observe(0.5, labels={"endpoint": "/api/stats"})

    assert histogram.keys() == [(("endpoint", "/api/stats"),)]
    assert histogram._totals[(("endpoint", "/api/stats"),)] == [1000, 500.0]
    assert histogram.get_stats({"endpoint": "/api/stats"}) == {
        "count": 1000,
        "sum": 500.0,
        "avg": 0.5,
    }


def test_loggers_created_before_configuration_follow_configured_level(monkeypatch):
    from azerothcore_ah.infrastructure.observability import logging as obs_logging

    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(obs_logging, "_configured", False)
    previous_level = root.level

    early = obs_logging.get_logger("azerothcore_ah.tests.early")
    try:
        obs_logging.configure_logging("debug")
        enabled = early.isEnabledFor(logging.DEBUG)
    finally:
        root.setLevel(previous_level)

    assert early.handlers == []
    assert early.level == logging.NOTSET
    assert enabled
    assert len(root.handlers) == 1
