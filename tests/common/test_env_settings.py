from __future__ import annotations

import logging
from pathlib import Path

import pytest

from common import settings
from common.diagnostics import (
    ClockDiagnosticError,
    CollectingSink,
    LoggingSink,
    RaisingSink,
    default_sink,
    report,
)
from common.env import env_bool, env_float, env_int, env_str
from engine.core.vector2 import Vector2
from util.utils import _find_project_root


@pytest.fixture()
def reload_settings():
    yield settings.reload_from_env
    settings.reload_from_env()


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PXC_TEST_INT", raising=False)
    assert env_int("PXC_TEST_INT", 5) == 5
    monkeypatch.setenv("PXC_TEST_INT", " 12 ")
    assert env_int("PXC_TEST_INT", 5) == 12
    monkeypatch.setenv("PXC_TEST_INT", "-3")
    assert env_int("PXC_TEST_INT", 5, min_value=1) == 1
    monkeypatch.setenv("PXC_TEST_INT", "twelve")
    assert env_int("PXC_TEST_INT", 5) == 5


def test_env_float_rejects_non_finite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXC_TEST_FLOAT", "inf")
    assert env_float("PXC_TEST_FLOAT", 0.5) == 0.5
    monkeypatch.setenv("PXC_TEST_FLOAT", "2.25")
    assert env_float("PXC_TEST_FLOAT", 0.5) == 2.25


@pytest.mark.parametrize(
    "raw, expected", [("1", True), ("0", False), ("yes", True), ("off", False), ("maybe", False)]
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("PXC_TEST_BOOL", raw)
    assert env_bool("PXC_TEST_BOOL", False) is expected


def test_env_str_blank_is_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXC_TEST_STR", "   ")
    assert env_str("PXC_TEST_STR", "x") == "x"


def test_settings_reload(monkeypatch: pytest.MonkeyPatch, reload_settings) -> None:
    monkeypatch.setenv("PXC_CLOCK_FPS", "0")
    monkeypatch.setenv("PXC_LOG_LEVEL", "debug")
    reload_settings()
    s = settings.get()
    assert s.CLOCK_FPS == 1
    assert s.LOG_LEVEL == "DEBUG"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch, reload_settings) -> None:
    for name in ("PXC_CLOCK_FPS", "PXC_STRICT_DIAGNOSTICS", "PXC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    s = settings.get()
    assert (s.CLOCK_FPS, s.STRICT_DIAGNOSTICS, s.LOG_LEVEL) == (8, False, "INFO")


def test_strict_mode_raises(monkeypatch: pytest.MonkeyPatch, reload_settings) -> None:
    monkeypatch.setenv("PXC_STRICT_DIAGNOSTICS", "1")
    reload_settings()
    assert isinstance(default_sink(), RaisingSink)
    with pytest.raises(ClockDiagnosticError, match="invalid x"):
        Vector2(float("nan"), 0.0)


def test_logging_sink_emits_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="engine.clock"):
        report(LoggingSink(), "invalid y to create 2D vector, switching to 0 by default")
    assert "invalid y" in caplog.text


def test_collecting_sink_clear() -> None:
    sink = CollectingSink()
    report(sink, "a")
    report(sink, "b")
    assert sink.messages == ["a", "b"]
    sink.clear()
    assert len(sink) == 0


def test_find_project_root_fallback(tmp_path: Path) -> None:
    # 上流に .git/pyproject.toml/configs が無い構造では start.parent.parent
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert _find_project_root(start) == start.parent.parent
