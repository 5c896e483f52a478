import pytest

from image_editor import config
from image_editor.errors import InvalidDimension
from image_editor.models.geometry_model import (
    GeometryState,
    on_height_changed,
    on_width_changed,
    parse_dimension,
    with_aspect_lock,
)


def test_from_image_fixes_ratio():
    state = GeometryState.from_image(1000, 500)
    assert state.size == (1000, 500)
    assert state.natural_aspect_ratio == 2.0
    assert state.aspect_lock is True


def test_locked_width_then_unlocked_width():
    state = GeometryState.from_image(1000, 500, aspect_lock=True)

    state = on_width_changed(state, 500)
    assert state.size == (500, 250)

    state = with_aspect_lock(state, False)
    state = on_width_changed(state, 300)
    assert state.size == (300, 250)


def test_locked_height_recomputes_width():
    state = GeometryState.from_image(1000, 500)
    state = on_height_changed(state, 100)
    assert state.size == (200, 100)


def test_unlocked_height_leaves_width():
    state = GeometryState.from_image(640, 480, aspect_lock=False)
    state = on_height_changed(state, 100)
    assert state.size == (640, 100)


def test_ratio_unchanged_by_edits():
    state = GeometryState.from_image(1920, 1080)
    edited = on_height_changed(on_width_changed(state, 333), 777)
    assert edited.natural_aspect_ratio == state.natural_aspect_ratio


def test_rounding_is_half_up():
    # 5 / 2.0 = 2.5 -> 3
    state = GeometryState.from_image(2, 1)
    assert on_width_changed(state, 5).target_height == 3


def test_recomputed_dimension_never_below_one():
    state = GeometryState.from_image(4000, 10)
    assert on_width_changed(state, 1).target_height == 1


@pytest.mark.parametrize("width, height", [(1000, 500), (1920, 1080), (333, 777), (17, 3)])
def test_locked_edits_keep_ratio_within_rounding(width, height):
    state = GeometryState.from_image(width, height)
    ratio = state.natural_aspect_ratio
    for edit in range(1, 1500, 37):
        by_width = on_width_changed(state, edit)
        assert abs(by_width.target_height - edit / ratio) <= 0.5 or by_width.target_height == 1
        by_height = on_height_changed(state, edit)
        assert abs(by_height.target_width - edit * ratio) <= 0.5 or by_height.target_width == 1


def test_state_is_immutable():
    state = GeometryState()
    with pytest.raises(AttributeError):
        state.target_width = 10  # type: ignore[misc]


@pytest.mark.parametrize("raw, expected", [("800", 800), (" 42 ", 42), (7, 7), ("12.0", 12)])
def test_parse_dimension_accepts(raw, expected):
    assert parse_dimension(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "0", "-5", "1.5", "nan", "inf", str(config.MAX_DIMENSION + 1), True])
def test_parse_dimension_rejects(raw):
    with pytest.raises(InvalidDimension):
        parse_dimension(raw)


def test_locked_width_rejects_oversized_recomputed_height():
    # 10x1000: width 10000 would need height 1000000
    state = GeometryState.from_image(10, 1000)
    with pytest.raises(InvalidDimension):
        on_width_changed(state, config.MAX_DIMENSION)


def test_locked_height_rejects_oversized_recomputed_width():
    state = GeometryState.from_image(1000, 10)
    with pytest.raises(InvalidDimension):
        on_height_changed(state, config.MAX_DIMENSION)


def test_recomputed_dimension_at_limit_is_accepted():
    state = GeometryState.from_image(2, 1)
    assert on_height_changed(state, config.MAX_DIMENSION // 2).size == (config.MAX_DIMENSION, config.MAX_DIMENSION // 2)


def test_unlocked_edit_ignores_extreme_ratio():
    state = GeometryState.from_image(10, 1000, aspect_lock=False)
    assert on_width_changed(state, config.MAX_DIMENSION).size == (config.MAX_DIMENSION, 1000)
