import io

import pytest
from PIL import Image

from asciiramp.errors import ConversionFailed, InvalidImage
from asciiramp.source import load_image
from conftest import solid


def _png_bytes(img):
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def test_load_from_path(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (6, 4), (255, 0, 0)).save(path)
    buffer = load_image(path)
    assert (buffer.width, buffer.height) == (6, 4)
    assert buffer.to_array()[0, 0].tolist() == [255, 0, 0, 255]


def test_load_from_str_path(tmp_path):
    path = tmp_path / "gray.jpg"
    Image.new("L", (8, 8), 100).save(path)
    assert load_image(str(path)).width == 8


def test_load_from_bytes():
    buffer = load_image(_png_bytes(Image.new("RGBA", (3, 3), (1, 2, 3, 4))))
    assert buffer.pixels[:4] == bytes([1, 2, 3, 4])


def test_load_from_file_object():
    buffer = load_image(io.BytesIO(_png_bytes(Image.new("RGB", (2, 5)))))
    assert (buffer.width, buffer.height) == (2, 5)


def test_load_passes_buffer_through():
    img = solid(2, 2, (0, 0, 0))
    assert load_image(img) is img


def test_missing_file(tmp_path):
    with pytest.raises(InvalidImage, match="File not found"):
        load_image(tmp_path / "missing.png")


def test_garbage_bytes():
    with pytest.raises(InvalidImage, match="Cannot identify") as info:
        load_image(b"definitely not an image")
    assert info.value.__cause__ is not None


def test_truncated_file(tmp_path):
    data = _png_bytes(Image.new("RGB", (64, 64), (10, 200, 30)))
    path = tmp_path / "truncated.png"
    path.write_bytes(data[: len(data) // 2])
    with pytest.raises(InvalidImage):
        load_image(path)


def test_zero_sized_pillow_image():
    with pytest.raises(InvalidImage):
        load_image(Image.new("RGB", (0, 0)))


def test_decoder_failure_is_conversion_failed(monkeypatch):
    data = _png_bytes(Image.new("RGB", (100, 100)))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(ConversionFailed) as info:
        load_image(data)
    assert isinstance(info.value.__cause__, Image.DecompressionBombError)
