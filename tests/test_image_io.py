"""
Tests for image import and export.
"""

import concurrent.futures
import io
import threading
from pathlib import Path

import pytest
from PIL import Image

from IF_Libs.errors import AcquisitionError
from IF_Libs.ImageIOLib import (
    ImageAcquirer,
    default_export_name,
    encode_image,
    get_supported_image_formats,
    is_supported_format,
    load_image,
    normalize_format,
    save_image,
)


def _png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class TestLoadImage:
    """Tests for load_image."""

    def test_loads_path_as_rgba(self, tmp_path):
        path = tmp_path / "photo.png"
        Image.new("RGB", (6, 4), "blue").save(path)

        image = load_image(path)

        assert image.mode == "RGBA"
        assert image.size == (6, 4)
        assert image.getpixel((0, 0)) == (0, 0, 255, 255)

    def test_loads_string_path(self, tmp_path):
        path = tmp_path / "photo.png"
        Image.new("RGB", (2, 2)).save(path)

        assert load_image(str(path)).size == (2, 2)

    def test_loads_bytes(self):
        data = _png_bytes(Image.new("RGBA", (3, 3), (10, 20, 30, 40)))

        image = load_image(data)

        assert image.getpixel((1, 1)) == (10, 20, 30, 40)

    def test_loads_file_object(self):
        data = _png_bytes(Image.new("RGB", (3, 5)))

        assert load_image(io.BytesIO(data)).size == (3, 5)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AcquisitionError, match="not found"):
            load_image(tmp_path / "missing.png")

    def test_unsupported_extension_raises(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello", encoding="utf-8")

        with pytest.raises(AcquisitionError, match="Unsupported"):
            load_image(path)

    def test_corrupt_data_raises(self):
        with pytest.raises(AcquisitionError):
            load_image(b"definitely not an image")

    def test_empty_data_raises(self):
        with pytest.raises(AcquisitionError):
            load_image(b"")

    def test_unsupported_source_type_raises(self):
        with pytest.raises(AcquisitionError):
            load_image(12345)


class TestSupportedFormats:
    """Tests for supported format helpers."""

    def test_lists_common_formats(self):
        formats = get_supported_image_formats()
        assert ".png" in formats
        assert ".jpg" in formats

    def test_case_insensitive(self):
        assert is_supported_format(Path("PHOTO.JPG"))
        assert not is_supported_format(Path("clip.mp4"))


class TestImageAcquirer:
    """Tests for background acquisition."""

    def test_delivers_loaded_image(self, tmp_path):
        path = tmp_path / "photo.png"
        Image.new("RGB", (4, 4), "green").save(path)
        received = []
        done = threading.Event()

        acquirer = ImageAcquirer()
        try:
            future = acquirer.submit(
                path,
                on_loaded=lambda image: (received.append(image), done.set()),
            )
            image = future.result(timeout=10)
            assert done.wait(timeout=10)
        finally:
            acquirer.shutdown()

        assert image.size == (4, 4)
        assert received[0].getpixel((0, 0)) == (0, 128, 0, 255)

    def test_reports_failure(self, tmp_path):
        errors = []
        done = threading.Event()

        acquirer = ImageAcquirer()
        try:
            future = acquirer.submit(
                tmp_path / "missing.png",
                on_failed=lambda error: (errors.append(error), done.set()),
            )
            with pytest.raises(AcquisitionError):
                future.result(timeout=10)
            assert done.wait(timeout=10)
        finally:
            acquirer.shutdown()

        assert isinstance(errors[0], AcquisitionError)

    def test_returns_future(self):
        acquirer = ImageAcquirer(max_workers=1)
        try:
            future = acquirer.submit(_png_bytes(Image.new("RGB", (1, 1))))
            assert isinstance(future, concurrent.futures.Future)
            future.result(timeout=10)
        finally:
            acquirer.shutdown()


class TestExport:
    """Tests for encode_image / save_image."""

    @pytest.mark.parametrize("name, expected", [
        ("png", "PNG"),
        ("jpg", "JPEG"),
        (".JPG", "JPEG"),
        ("jpeg", "JPEG"),
        ("webp", "WEBP"),
    ])
    def test_normalize_format(self, name, expected):
        assert normalize_format(name) == expected

    def test_normalize_empty_raises(self):
        with pytest.raises(ValueError):
            normalize_format("  ")

    def test_encode_png_round_trips_pixels(self):
        image = Image.new("RGBA", (2, 2), (5, 6, 7, 8))

        decoded = Image.open(io.BytesIO(encode_image(image)))

        assert decoded.format == "PNG"
        assert decoded.convert("RGBA").getpixel((0, 0)) == (5, 6, 7, 8)

    def test_encode_jpeg_drops_alpha(self):
        image = Image.new("RGBA", (8, 8), (200, 100, 50, 128))

        decoded = Image.open(io.BytesIO(encode_image(image, "jpg")))

        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"

    def test_encode_rejects_non_image(self):
        with pytest.raises(TypeError):
            encode_image("not an image")

    def test_encode_unknown_format_raises(self):
        with pytest.raises(ValueError):
            encode_image(Image.new("RGB", (1, 1)), "NOPE")

    def test_save_infers_format_from_extension(self, tmp_path):
        path = save_image(Image.new("RGBA", (3, 3), "red"), tmp_path / "out.jpg")

        with Image.open(path) as saved:
            assert saved.format == "JPEG"

    def test_save_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            save_image(Image.new("RGB", (1, 1)), tmp_path / "nope" / "out.png")

    def test_default_export_name(self):
        assert default_export_name("beach.jpeg") == "instafilter_beach.png"
        assert default_export_name(None, "jpg") == "instafilter_photo.jpg"
