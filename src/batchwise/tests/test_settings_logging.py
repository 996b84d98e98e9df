"""Tests for settings loading and structured logging."""

from __future__ import annotations

import io

import orjson
import pytest

from batchwise import clear_settings_cache, configure_from_settings, configure_logging, get_logger, get_settings, run_in_batches
from batchwise.runtime.observability.logging import ConsoleRenderer, JsonRenderer, NoOpRenderer


@pytest.fixture(autouse=True)
def fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────


def test_defaults() -> None:
    settings = get_settings()
    assert settings.batch.size == 10
    assert settings.batch.delay_ms == 0.0
    assert settings.logging.format == "console"
    assert settings.effective_log_level == "INFO"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BATCHWISE_BATCH_SIZE", "25")
    monkeypatch.setenv("BATCHWISE_LOG_LEVEL", "warning")
    monkeypatch.setenv("BATCHWISE_DEBUG", "true")
    settings = get_settings()
    assert settings.batch.size == 25
    assert settings.logging.level == "WARNING"
    assert settings.effective_log_level == "DEBUG"


def test_nested_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BATCHWISE_BATCH__SIZE", "4")
    monkeypatch.setenv("BATCHWISE_BATCH__DELAY_MS", "12.5")
    settings = get_settings()
    assert settings.batch.size == 4
    assert settings.batch.delay_ms == 12.5


# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_scheduler_emits_debug_lifecycle_events() -> None:
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)

    await run_in_batches(lambda x: x, [1, 2, 3], 2)

    entries = [orjson.loads(line) for line in buf.getvalue().splitlines()]
    events = [e["event"] for e in entries]
    assert events.count("batch started") == 2
    assert events.count("batch completed") == 2
    assert events[-1] == "run finished"
    assert all(e["level"] == "debug" and e["logger"] == "batchwise.batch" for e in entries)


@pytest.mark.asyncio
async def test_scheduler_logs_abort_at_debug_only() -> None:
    buf = io.StringIO()
    configure_logging("json", "INFO", output=buf)

    def op(x: int) -> int:
        raise ValueError(x)

    with pytest.raises(ValueError):
        await run_in_batches(op, [1], 1)
    assert buf.getvalue() == ""


@pytest.mark.asyncio
async def test_bound_logger_console_output() -> None:
    buf = io.StringIO()
    configure_logging("console", "INFO", output=buf, colors=False)

    log = get_logger("jobs", run="r1").bind(batch=3)
    with log.scope(tenant="acme"):
        log.info("batch started", size=10)
    log.debug("hidden")

    line = buf.getvalue().strip()
    assert "[info] batch started" in line
    assert 'run="r1"' in line and "batch=3" in line and "size=10" in line and 'tenant="acme"' in line
    assert "hidden" not in buf.getvalue()


@pytest.mark.asyncio
async def test_bind_and_scope_do_not_leak() -> None:
    buf = io.StringIO()
    configure_logging("console", "DEBUG", output=buf, colors=False)

    base = get_logger("jobs")
    bound = base.bind(batch=1)
    assert "batch" not in base.context
    with base.scope(tenant="acme"):
        bound.debug("inside")
    base.debug("outside")

    inside, outside = buf.getvalue().splitlines()
    assert "[debug] inside" in inside and 'tenant="acme"' in inside and "batch=1" in inside
    assert "tenant" not in outside and "batch" not in outside


@pytest.mark.asyncio
async def test_configure_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BATCHWISE_LOG_FORMAT", "json")
    monkeypatch.setenv("BATCHWISE_LOG_LEVEL", "debug")
    buf = io.StringIO()
    renderer = configure_from_settings(output=buf)
    assert isinstance(renderer, JsonRenderer)
    get_logger("x").debug("visible")
    assert orjson.loads(buf.getvalue())["event"] == "visible"


@pytest.mark.asyncio
async def test_configure_logging_formats() -> None:
    assert isinstance(configure_logging("none"), NoOpRenderer)
    assert isinstance(configure_logging("console", output=io.StringIO()), ConsoleRenderer)
    with pytest.raises(ValueError):
        configure_logging("xml")
