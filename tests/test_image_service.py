import pytest
from PIL import Image

from image_editor.errors import DecodeFailure
from image_editor.services.image_service import ImageService


def test_load_png(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (40, 20), (10, 20, 30)).save(path)

    source = ImageService().load_image(path)

    assert source.width == 40 and source.height == 20
    assert source.natural_aspect_ratio == 2.0
    assert source.mode == "RGB"
    assert source.pil_image.mode == "RGBA"
    assert source.pil_image.getpixel((0, 0)) == (10, 20, 30, 255)
    assert source.size_bytes == path.stat().st_size


def test_load_palette_gif(tmp_path):
    path = tmp_path / "anim.gif"
    Image.new("P", (8, 8), 3).save(path)
    source = ImageService().load_image(str(path))
    assert source.mode == "P"
    assert source.pil_image.mode == "RGBA"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path / "nope.png")


def test_directory_is_not_a_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path)


def test_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("definitely not pixels")
    with pytest.raises(DecodeFailure):
        ImageService().load_image(path)


def test_truncated_image(tmp_path):
    path = tmp_path / "broken.png"
    Image.effect_noise((128, 128), 80).save(path)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])
    with pytest.raises(DecodeFailure):
        ImageService().load_image(path)


def test_pixel_limit_exceeded(tmp_path, monkeypatch):
    path = tmp_path / "huge.png"
    Image.new("RGB", (100, 100)).save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    with pytest.raises(DecodeFailure):
        ImageService().load_image(path)
