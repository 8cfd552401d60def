from __future__ import annotations

import math

import pytest

from common.diagnostics import CollectingSink
from engine.core.vector2 import Vector2


def test_components_and_norm() -> None:
    v = Vector2(3.0, 4.0)
    assert (v.x, v.y) == (3.0, 4.0)
    assert v.norm() == pytest.approx(5.0)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "abc", None])
def test_invalid_x_is_coerced_to_zero(bad: object, sink: CollectingSink) -> None:
    v = Vector2(bad, 2.0, sink=sink)  # type: ignore[arg-type]
    assert v.x == 0.0
    assert v.y == 2.0
    assert len(sink) == 1
    assert "x" in sink.messages[0]


def test_both_invalid_reports_twice(sink: CollectingSink) -> None:
    v = Vector2(math.nan, math.nan, sink=sink)
    assert v.as_tuple() == (0.0, 0.0)
    assert len(sink) == 2


def test_immutable() -> None:
    v = Vector2(1.0, 2.0)
    with pytest.raises(AttributeError):
        v.x = 3.0  # type: ignore[misc]
    with pytest.raises(AttributeError):
        v.foo = 1  # type: ignore[attr-defined]


def test_lerp_and_equality() -> None:
    a = Vector2(0.0, 10.0)
    b = Vector2(100.0, -10.0)
    assert a.lerp(b, 0.25) == Vector2(25.0, 5.0)
    assert hash(Vector2(1.0, 2.0)) == hash(Vector2(1.0, 2.0))
    assert list(Vector2(1.0, 2.0)) == [1.0, 2.0]


def test_lerp_reports_overflow_to_given_sink() -> None:
    sink = CollectingSink()
    v = Vector2(0.0, 1.0).lerp(Vector2(1e308, 1.0), 10.0, sink=sink)
    assert v.as_tuple() == (0.0, 1.0)
    assert sink.messages == ["invalid x to create 2D vector, switching to 0 by default"]
