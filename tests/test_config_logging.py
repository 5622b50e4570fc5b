"""Settings validation and structured log output."""

import io
import json

import pytest
import structlog
from pydantic import ValidationError

from taskboard.config import Settings
from taskboard.observability import setup_logging


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


def test_default_secret_rejected_outside_development():
    with pytest.raises(ValidationError, match="TASKBOARD_JWT_SECRET"):
        Settings(environment="production")


def test_custom_secret_accepted_in_production():
    s = Settings(environment="production", jwt_secret="a-long-random-secret")
    assert s.jwt_secret == "a-long-random-secret"


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("TASKBOARD_PORT", "8080")
    monkeypatch.setenv("TASKBOARD_RATE_LIMIT_AUTH_RPM", "3")
    s = Settings()
    assert s.port == 8080
    assert s.rate_limit_auth_rpm == 3


@pytest.mark.parametrize(
    "environment, log_format, expected",
    [
        ("development", "", "console"),
        ("production", "", "json"),
        ("production", "console", "console"),
    ],
)
def test_log_format_follows_environment(environment, log_format, expected):
    s = Settings(environment=environment, jwt_secret="x" * 32, log_format=log_format)
    assert s.resolved_log_format == expected


def test_json_logs_carry_bound_context(log_stream):
    setup_logging("INFO", "json", stream=log_stream)
    structlog.contextvars.bind_contextvars(request_id="req-1")

    structlog.get_logger().info("team.created", team_id=7)

    line = json.loads(log_stream.getvalue().strip().splitlines()[-1])
    assert line["event"] == "team.created"
    assert line["team_id"] == 7
    assert line["request_id"] == "req-1"
    assert line["level"] == "info"
    assert "timestamp" in line


def test_log_level_filters(log_stream):
    setup_logging("WARNING", "json", stream=log_stream)

    structlog.get_logger().info("task.updated")
    assert log_stream.getvalue() == ""

    structlog.get_logger().warning("rate_limit.redis_error")
    assert "rate_limit.redis_error" in log_stream.getvalue()
