import io

from PIL import Image

from image_editor.services.export_service import ExportService


def test_png_bytes_decode_to_identical_buffer(noisy_source):
    image = noisy_source.pil_image
    data = ExportService().to_png_bytes(image)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.mode == "RGBA"
        assert decoded.size == image.size
        assert decoded.tobytes() == image.tobytes()


def test_save_png_keeps_suffix(tmp_path, make_source):
    image = make_source(5, 4, (1, 2, 3, 255)).pil_image
    saved = ExportService().save_png(image, tmp_path / "result.PNG")
    assert saved == tmp_path / "result.PNG"
    with Image.open(saved) as decoded:
        assert decoded.getpixel((0, 0)) == (1, 2, 3, 255)


def test_save_png_appends_suffix(tmp_path, make_source):
    image = make_source(3, 3).pil_image
    saved = ExportService().save_png(image, tmp_path / "result.jpg")
    assert saved.name == "result.jpg.png"
    assert saved.exists()


def test_suggested_filename():
    assert ExportService().suggest_filename() == "edited-image.png"
