import numpy as np
import pytest
from PIL import Image

from image_editor import config
from image_editor.models.filter_model import FilterState
from image_editor.models.geometry_model import GeometryState
from image_editor.models.text_overlay_model import TextOverlayState
from image_editor.services.process_service import ProcessService
from image_editor.services.text_service import TextService


@pytest.fixture
def service():
    return ProcessService()


def _geometry_for(source, width=None, height=None):
    return GeometryState(
        target_width=width or source.width,
        target_height=height or source.height,
        aspect_lock=False,
        natural_aspect_ratio=source.natural_aspect_ratio,
    )


def test_identity_is_plain_resize(service, noisy_source):
    geometry = _geometry_for(noisy_source, 32, 24)
    out = service.compose(noisy_source, geometry, FilterState(), TextOverlayState())
    expected = noisy_source.pil_image.resize((32, 24), config.RESAMPLE)
    assert out.size == (32, 24)
    assert out.tobytes() == expected.tobytes()


def test_identity_at_same_size_is_exact_copy(service, noisy_source):
    out = service.compose(noisy_source, _geometry_for(noisy_source), FilterState(), TextOverlayState())
    assert out.tobytes() == noisy_source.pil_image.tobytes()
    assert out is not noisy_source.pil_image


def test_stretches_to_target_without_keeping_ratio(service, make_source):
    source = make_source(100, 50)
    out = service.compose(source, _geometry_for(source, 30, 90), FilterState(), TextOverlayState())
    assert out.size == (30, 90)
    assert out.mode == "RGBA"


def test_source_is_not_mutated(service, noisy_source):
    before = noisy_source.pil_image.tobytes()
    overlay = TextOverlayState(text="Hi", visible=True, x=2, y=2, font_size=20)
    service.compose(noisy_source, _geometry_for(noisy_source), FilterState(sepia=80), overlay)
    assert noisy_source.pil_image.tobytes() == before


def test_compose_is_idempotent(service, noisy_source):
    args = (
        noisy_source,
        _geometry_for(noisy_source, 50, 50),
        FilterState(brightness=120, contrast=80, grayscale=30, sepia=60),
        TextOverlayState(text="Test", visible=True, font_size=24, color="#FF0000", x=5, y=5),
    )
    first = service.compose(*args)
    second = service.compose(*args)
    assert first.tobytes() == second.tobytes()
    assert first is not second


def test_mid_gray_half_brightness(service, make_source):
    source = make_source(10, 10, (128, 128, 128, 255))
    out = service.compose(source, _geometry_for(source), FilterState(brightness=50), TextOverlayState())
    arr = np.asarray(out)
    assert np.all(np.abs(arr[..., :3].astype(int) - 64) <= 1)


def test_full_grayscale_desaturates(service, noisy_source):
    out = service.compose(noisy_source, _geometry_for(noisy_source), FilterState(grayscale=100), TextOverlayState())
    arr = np.asarray(out)
    assert np.array_equal(arr[..., 0], arr[..., 1])
    assert np.array_equal(arr[..., 1], arr[..., 2])


def test_full_grayscale_with_brightness_and_contrast(service, noisy_source):
    filters = FilterState(brightness=140, contrast=60, grayscale=100)
    arr = np.asarray(service.compose(noisy_source, _geometry_for(noisy_source), filters, TextOverlayState()))
    assert np.array_equal(arr[..., 0], arr[..., 2])


def test_hidden_or_empty_overlay_is_noop(service, make_source):
    source = make_source(120, 80, (0, 0, 0, 255))
    geometry = _geometry_for(source)
    plain = service.compose(source, geometry, FilterState(), TextOverlayState())
    hidden = service.compose(source, geometry, FilterState(), TextOverlayState(text="A", visible=False))
    empty = service.compose(source, geometry, FilterState(), TextOverlayState(text="", visible=True))
    assert hidden.tobytes() == plain.tobytes()
    assert empty.tobytes() == plain.tobytes()


def test_text_drawn_at_anchor_on_black(service, make_source):
    source = make_source(200, 200, (0, 0, 0, 255))
    overlay = TextOverlayState(text="A", font_size=48, color="#FFFFFF", x=50, y=50, visible=True)
    out = service.compose(source, _geometry_for(source), FilterState(), overlay)
    arr = np.asarray(out)

    left, top, right, bottom = TextService().text_bbox(overlay)
    assert left >= 50 - 2 and top >= 50 - 2
    assert left < 50 + 48 and top < 50 + 48

    # The exact pixel (50, 50) is the corner of the glyph cell and is usually
    # empty ("A" has no ink there), so ink is checked in the box anchored at
    # (50, 50). See DESIGN.md, "Text anchor".
    region = arr[50:50 + 48, 50:50 + 48, :3]
    assert region.max() > 0
    assert tuple(arr[0, 0, :3]) == (0, 0, 0)
    # nothing above or left of the anchor
    assert arr[:48, :, :3].max() == 0
    assert arr[:, :48, :3].max() == 0


def test_text_not_affected_by_filters(service, make_source):
    source = make_source(160, 120, (128, 128, 128, 255))
    geometry = _geometry_for(source)
    overlay = TextOverlayState(text="AH", font_size=60, color="#FF0000", x=10, y=10, visible=True)

    base = np.asarray(service.compose(source, geometry, FilterState(), overlay))
    text_mask = np.all(base[..., :3] == (255, 0, 0), axis=-1)
    assert text_mask.sum() > 0

    for filters in (
        FilterState(brightness=30),
        FilterState(contrast=200),
        FilterState(grayscale=100),
        FilterState(sepia=100, brightness=180),
    ):
        filtered = np.asarray(service.compose(source, geometry, filters, overlay))
        assert np.array_equal(filtered[text_mask], base[text_mask])


def test_off_canvas_text_is_accepted(service, make_source):
    source = make_source(40, 40, (0, 0, 0, 255))
    geometry = _geometry_for(source)
    for x, y in ((-500, -500), (1000, 1000), (-10, 20)):
        overlay = TextOverlayState(text="Off canvas", font_size=30, x=x, y=y, visible=True)
        out = service.compose(source, geometry, FilterState(), overlay)
        assert out.size == (40, 40)


def test_scale_to_target_returns_copy(service, make_source):
    source = make_source(8, 8)
    scaled = service.scale_to_target(source, _geometry_for(source))
    assert scaled is not source.pil_image
    assert isinstance(scaled, Image.Image)
