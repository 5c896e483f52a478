from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from image_editor.models.image_model import SourceImage


def _source_from(image: Image.Image, name: str = "memory.png") -> SourceImage:
    rgba = image.convert("RGBA")
    return SourceImage(
        path=Path(name),
        pil_image=rgba,
        width=rgba.width,
        height=rgba.height,
        mode=image.mode,
        size_bytes=None,
    )


@pytest.fixture
def make_source():
    """Factory: uniform RGBA source of the given size and colour."""

    def factory(width=10, height=10, color=(128, 128, 128, 255)):
        return _source_from(Image.new("RGBA", (width, height), color))

    return factory


@pytest.fixture
def noisy_source():
    """Deterministic 64x48 source with varied colours."""
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
    return _source_from(Image.fromarray(arr))
