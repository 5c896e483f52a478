import pytest

from image_editor.models.filter_model import FILTER_NAMES, FilterState


def test_defaults_are_identity():
    state = FilterState()
    assert state.is_identity
    assert state.as_dict() == {"brightness": 100, "contrast": 100, "grayscale": 0, "sepia": 0}


def test_pipeline_order():
    assert FILTER_NAMES == ("brightness", "contrast", "grayscale", "sepia")


@pytest.mark.parametrize(
    "kwargs",
    [{"brightness": -1}, {"contrast": 201}, {"grayscale": 101}, {"sepia": -0.5}],
)
def test_out_of_range_construction_rejected(kwargs):
    with pytest.raises(ValueError):
        FilterState(**kwargs)


def test_with_value_clamps_into_range():
    state = FilterState()
    assert state.with_value("brightness", 500).brightness == 200
    assert state.with_value("sepia", -20).sepia == 0
    assert state.with_value("grayscale", 40).grayscale == 40


def test_with_value_returns_new_state():
    state = FilterState()
    changed = state.with_value("contrast", 150)
    assert state.contrast == 100
    assert changed.contrast == 150
    assert not changed.is_identity


def test_with_value_unknown_filter():
    with pytest.raises(KeyError):
        FilterState().with_value("blur", 10)
