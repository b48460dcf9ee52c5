"""
Tests for metric helpers and logging configuration.
"""

import importlib
import json
import logging

import structlog
from prometheus_client import REGISTRY

from pricequarry.config import MonitoringConfig
from pricequarry.observability import configure_logging, increment, metrics, observe


def sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetrics:
    def test_increment_counter(self):
        labels = {"strategy": "static", "result": "sufficient"}
        before = sample("pricequarry_strategy_attempts_total", labels)

        increment("strategy_attempts_total", labels=labels)

        assert sample("pricequarry_strategy_attempts_total", labels) == before + 1

    def test_observe_histogram(self):
        labels = {"strategy": "headless"}
        before = sample("pricequarry_strategy_duration_seconds_count", labels)

        observe("strategy_duration_seconds", 1.25, labels=labels)

        assert sample("pricequarry_strategy_duration_seconds_count", labels) == before + 1

    def test_unknown_metric_is_ignored(self):
        increment("no_such_metric")
        observe("no_such_metric", 1.0)

    def test_reload_reuses_collectors(self):
        original = metrics.METRICS["scrapes_total"]
        reloaded = importlib.reload(metrics)
        assert reloaded.METRICS["scrapes_total"] is original


class TestLogging:
    def test_json_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "scrape.log"
        configure_logging(MonitoringConfig(log_level="INFO", log_file=str(log_file)))

        with structlog.contextvars.bound_contextvars(request_id="abc123", url="https://example.org/p"):
            structlog.get_logger("pricequarry.test").info("Scrape finished", ok=True)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        record = lines[-1]
        assert record["event"] == "Scrape finished"
        assert record["ok"] is True
        assert record["request_id"] == "abc123"
        assert record["url"] == "https://example.org/p"
        assert record["level"] == "info"

    def test_level_filters_records(self, tmp_path):
        log_file = tmp_path / "quiet.log"
        configure_logging(MonitoringConfig(log_level="WARNING", log_file=str(log_file)))

        structlog.get_logger("pricequarry.test").info("hidden")
        structlog.get_logger("pricequarry.test").warning("shown")
        for handler in logging.getLogger().handlers:
            handler.flush()

        events = [json.loads(line)["event"] for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert events == ["shown"]
