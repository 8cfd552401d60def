import math

import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import assume, given, strategies as st  # type: ignore

from common.diagnostics import CollectingSink
from engine.clock.time_state import ClockTimeState, EditMode, combine_utc_offset
from engine.core.affine_matrix import AffineMatrix
from engine.core.animation import Animation, AnimationKind, AnimationStack
from engine.core.vector2 import Vector2

hours = st.integers(-12, 14)
minutes = st.sampled_from([0, 30, 45])
coords = st.floats(-500, 500, allow_nan=False)
times_ms = st.integers(0, 4_102_444_800_000)  # 1970..2100
local_offsets = st.integers(-12 * 60, 14 * 60)


@given(h=hours, m=minutes)
def test_utc_offset_sign_follows_hour(h, m):
    off = combine_utc_offset(h, m)
    assert off == (h * 60 - m if h < 0 else h * 60 + m)
    assert abs(off) == abs(h) * 60 + m


@given(theta=st.floats(-720, 720, allow_nan=False), px=coords, py=coords)
def test_rotation_then_inverse_is_identity(theta, px, py):
    pivot = Vector2(px, py)
    m = AffineMatrix.rotation(theta, pivot).multiply(AffineMatrix.rotation(-theta, pivot))
    assert m.is_close(AffineMatrix.identity(), tol=1e-6)


@given(
    kind=st.sampled_from(list(AnimationKind)),
    t=st.floats(0, 10_000, allow_nan=False),
    duration=st.floats(0.5, 100, allow_nan=False),
    ex=coords,
    ey=coords,
)
def test_sample_is_periodic(kind, t, duration, ex, ey):
    anim = Animation(kind, Vector2(10, 20), Vector2(0, 0), Vector2(ex, ey), 0.0, duration)
    # 周期境界（進捗が 1 に巻き戻る位置）の近傍は除外
    p = ((t / duration) % 1.0)
    assume(1e-6 < p < 1 - 1e-6)
    assert anim.sample(t).is_close(anim.sample(t + duration), tol=1e-3)


@given(now=times_ms, local=local_offsets, h=hours, m=minutes, twelve=st.booleans())
def test_display_fields_are_in_range(now, local, h, m, twelve):
    state = ClockTimeState(combine_utc_offset(h, m), is_12_hour_format=twelve)
    text = state.compute_display(now, local)
    hh, rest = text.split(":", 1)
    mm, rest = rest.split("'", 1)
    ss = rest[:2]
    if twelve:
        assert 1 <= int(hh) <= 12
        assert text.endswith((" AM", " PM"))
    else:
        assert 0 <= int(hh) <= 23
    assert 0 <= int(mm) <= 59
    assert 0 <= int(ss) <= 59


@given(now=times_ms, local_a=local_offsets, local_b=local_offsets, h=hours, m=minutes)
def test_display_is_independent_of_observer_offset(now, local_a, local_b, h, m):
    state = ClockTimeState(combine_utc_offset(h, m))
    assert state.compute_display(now, local_a) == state.compute_display(now, local_b)


@given(t=st.floats(-1e6, 1e6, allow_nan=False), ex=coords, ey=coords)
def test_none_animations_do_not_change_the_stack(t, ex, ey):
    real = Animation(AnimationKind.TRANSLATION, Vector2(0, 0), Vector2(0, 0), Vector2(ex, ey), 0, 3)
    none = Animation(AnimationKind.NONE, Vector2(1, 1), Vector2(2, 2), Vector2(3, 3), 1, 2)
    with_none = AnimationStack([none, real, none], sink=CollectingSink())
    without = AnimationStack([real], sink=CollectingSink())
    assert with_none.compose(t) == without.compose(t)


@given(presses=st.lists(st.sampled_from(["edit", "inc"]), max_size=40))
def test_reset_restores_zero_correction(presses):
    state = ClockTimeState(0)
    for p in presses:
        if p == "edit":
            state.cycle_edit_mode()
        else:
            state.apply_increase()
    assert 0 <= state.user_hour_offset < 24 and 0 <= state.user_minute_offset < 60
    state.reset()
    once = (state.user_hour_offset, state.user_minute_offset)
    state.reset()
    assert once == (state.user_hour_offset, state.user_minute_offset) == (0, 0)
    assert state.compute_display(0) == "00:00'00\""
    assert state.edit_mode in tuple(EditMode)


@given(x=st.floats(allow_nan=True, allow_infinity=True), y=coords)
def test_vector_components_are_always_finite(x, y):
    v = Vector2(x, y, sink=CollectingSink())
    assert math.isfinite(v.x) and math.isfinite(v.y)
