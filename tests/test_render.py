from datetime import timedelta

import pytest

from neomidi.config import ColorSchema
from neomidi.render import (
    BackgroundClock,
    Color,
    KeyState,
    NoteInstance,
    QuadBatch,
    QuadInstance,
    WaterfallClock,
    border_radius,
)


SCHEMA = ColorSchema(base=(210, 89, 222), dark=(125, 69, 134))


def test_from_rgba8_extremes():
    assert Color.from_rgba8(255, 0, 255, 1.0) == Color(1.0, 0.0, 1.0, 1.0)


def test_from_rgba8_rejects_out_of_range():
    with pytest.raises(ValueError):
        Color.from_rgba8(256, 0, 0, 1.0)
    with pytest.raises(ValueError):
        Color.from_rgba8(-1, 0, 0, 1.0)


def test_linear_conversion_keeps_endpoints_and_alpha():
    assert Color(0.0, 1.0, 0.0, 0.25).into_linear_rgba() == pytest.approx(
        (0.0, 1.0, 0.0, 0.25)
    )


def test_linear_conversion_darkens_midtones_monotonically():
    values = [Color(v / 10, v / 10, v / 10).into_linear_rgb()[0] for v in range(11)]
    assert values == sorted(values)
    assert values[5] < 0.5


def test_border_radius_ratio_between_kinds():
    assert border_radius(20.0, False) == pytest.approx(3.5 * border_radius(20.0, True))
    assert border_radius(0.0, False) == 0.0


def test_border_radius_scales_with_width():
    assert border_radius(40.0, True) == pytest.approx(2 * border_radius(20.0, True))


def test_key_default_colors():
    assert KeyState(is_sharp=False).color() == Color(1.0, 1.0, 1.0, 1.0)
    assert KeyState(is_sharp=True).color() == Color(0.0, 0.0, 0.0, 1.0)


def test_key_pressed_by_user_grey():
    sharp = KeyState(is_sharp=True)
    sharp.set_pressed_by_user(True)
    assert sharp.color() == Color(0.3, 0.3, 0.3, 1.0)
    white = KeyState(is_sharp=False)
    white.set_pressed_by_user(True)
    assert white.color() == Color(0.5, 0.5, 0.5, 1.0)


def test_key_pressed_by_file_uses_schema_by_kind():
    white = KeyState(is_sharp=False)
    white.pressed_by_file_on(SCHEMA)
    assert white.color() == Color.from_rgba8(*SCHEMA.base, 1.0)
    sharp = KeyState(is_sharp=True)
    sharp.pressed_by_file_on(SCHEMA)
    assert sharp.color() == Color.from_rgba8(*SCHEMA.dark, 1.0)


def test_user_press_wins_over_file_and_release_restores():
    key = KeyState(is_sharp=False)
    key.pressed_by_file_on(SCHEMA)
    key.set_pressed_by_user(True)
    assert key.color() == Color(0.5, 0.5, 0.5, 1.0)
    key.set_pressed_by_user(False)
    key.pressed_by_file_off()
    assert key.color() == Color(1.0, 1.0, 1.0, 1.0)


def test_quad_instance_defaults():
    quad = QuadInstance()
    assert quad.color == (0.0, 0.0, 0.0, 1.0)
    assert quad.border_radius == (0.0, 0.0, 0.0, 0.0)


def test_quad_batch_push_replace_clear():
    batch = QuadBatch()
    first = QuadInstance(position=(1.0, 2.0))
    second = QuadInstance(size=(3.0, 4.0))
    batch.push(first)
    batch.push(second)
    assert list(batch) == [first, second]
    batch.replace([second])
    assert list(batch) == [second]
    batch.clear()
    assert len(batch) == 0


def test_note_instance_fields():
    note = NoteInstance(position=(1.0, 2.0), size=(3.0, 4.0), color=(0.1, 0.2, 0.3), radius=5.0)
    assert note.position == (1.0, 2.0)
    assert note.radius == 5.0


def test_waterfall_clock():
    clock = WaterfallClock()
    assert (clock.time, clock.speed) == (0.0, 400.0)
    clock.set_speed(250.0)
    clock.update_time(1.5)
    assert (clock.time, clock.speed) == (1.5, 250.0)


def test_background_clock_accumulates():
    clock = BackgroundClock()
    assert clock.time == 10.0
    clock.update_time(timedelta(seconds=0.5))
    clock.update_time(timedelta(seconds=0.5))
    assert clock.time == pytest.approx(11.0)