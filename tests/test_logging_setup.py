import io
import json

import pytest
import structlog

from finforecast.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENV", "test")
    yield
    configure_logging()


@pytest.fixture
def buf():
    return io.StringIO()


def test_lines_are_json_with_service_and_env(buf):
    log = configure_logging(service="finforecast-cli", stream=buf)
    log.info("request.received", request_id="r-1")
    structlog.get_logger("finforecast.pipeline").info("forecast.generated", quality=45)

    first, second = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert first["event"] == "request.received" and first["request_id"] == "r-1"
    assert second["event"] == "forecast.generated" and second["quality"] == 45
    for rec in (first, second):
        assert rec["service"] == "finforecast-cli"
        assert rec["env"] == "test"
        assert rec["level"] == "info"


def test_default_level_is_per_surface(buf):
    log = configure_logging(stream=buf, default_level="WARNING")
    log.info("hidden")
    log.warning("shown")
    assert [json.loads(line)["event"] for line in buf.getvalue().splitlines()] == ["shown"]


def test_log_level_env_overrides_default(buf, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    log = configure_logging(stream=buf, default_level="WARNING")
    log.debug("visible")
    assert "visible" in buf.getvalue()


def test_reconfigure_moves_existing_loggers():
    first, second = io.StringIO(), io.StringIO()
    log = structlog.get_logger("finforecast.pipeline")
    configure_logging(stream=first)
    log.info("before.reconfigure")
    configure_logging(stream=second)
    log.info("after.reconfigure")
    assert "before.reconfigure" in first.getvalue()
    assert "after.reconfigure" not in first.getvalue()
    assert "after.reconfigure" in second.getvalue()
