"""Tests for image loading/resampling, the processing facade and text export."""

import numpy as np
import pytest
from PIL import Image

from conftest import gray_rows_to_image
from image_ascii.models.ascii_model import AsciiArt, AsciiConfig
from image_ascii.models.errors import InvalidDimensionsError
from image_ascii.services.export_service import ExportService
from image_ascii.services.image_service import ImageService
from image_ascii.services.process_service import ProcessService

# char_aspect=1.0 with target_width == image width keeps the raster as is
IDENTITY = dict(char_aspect=1.0)


# ---------------------------------------------------------------------------
# ImageService
# ---------------------------------------------------------------------------


class TestLoadImage:
    def test_loads_as_rgba_with_metadata(self, write_image):
        path = write_image(Image.new("RGB", (6, 4), (10, 20, 30)))
        data = ImageService().load_image(path)
        assert data.pil_image.mode == "RGBA"
        assert (data.width, data.height) == (6, 4)
        assert data.mode == "RGB"
        assert data.size_bytes and data.size_bytes > 0

    def test_palette_image(self, write_image):
        path = write_image(Image.new("P", (3, 3)), "palette.png")
        data = ImageService().load_image(str(path))
        assert data.mode == "P"
        assert data.pil_image.mode == "RGBA"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageService().load_image(tmp_path / "nope.png")

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageService().load_image(tmp_path)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(ValueError):
            ImageService().load_image(path)


class TestGridSize:
    def test_applies_aspect_and_char_compensation(self):
        assert ImageService.grid_size(200, 100, 80) == (80, 22)

    def test_at_least_one_row(self):
        assert ImageService.grid_size(1000, 1, 10) == (10, 1)

    def test_identity(self):
        assert ImageService.grid_size(7, 5, 7, char_aspect=1.0) == (7, 5)

    @pytest.mark.parametrize("args", [(0, 10, 10), (10, 0, 10), (10, 10, 0)])
    def test_invalid(self, args):
        with pytest.raises(InvalidDimensionsError):
            ImageService.grid_size(*args)


class TestToPixelBuffer:
    def test_resamples_to_grid(self):
        image = Image.new("RGB", (200, 100), (255, 255, 255))
        buf = ImageService().to_pixel_buffer(image, 80)
        assert (buf.width, buf.height) == (80, 22)
        assert buf.data.dtype == np.uint8
        assert buf.data.size == 80 * 22 * 4

    def test_identity_keeps_pixels(self, step_image):
        buf = ImageService().to_pixel_buffer(step_image, 4, char_aspect=1.0)
        rgba = buf.as_array()
        assert rgba[:, :, 0].tolist() == [[0, 0, 255, 255], [0, 0, 255, 255]]
        assert np.all(rgba[:, :, 3] == 255)


# ---------------------------------------------------------------------------
# ProcessService
# ---------------------------------------------------------------------------


class TestImageToAscii:
    def test_flat_shading(self, step_image):
        config = AsciiConfig(target_width=4, **IDENTITY)
        art = ProcessService().image_to_ascii(step_image, config)
        assert art.text == "  ##\n  ##\n"
        assert (art.width, art.height) == (4, 2)

    def test_edges(self, step_image):
        config = AsciiConfig(target_width=4, enable_edge_detection=True, edge_sensitivity=100, **IDENTITY)
        art = ProcessService().image_to_ascii(step_image, config)
        assert art.rows == [" --#", " --#"]

    def test_gradient_row_uses_whole_palette(self):
        image = gray_rows_to_image([[0, 29, 57, 86, 114, 142, 171, 199, 227, 255]])
        config = AsciiConfig(target_width=10, **IDENTITY)
        art = ProcessService().image_to_ascii(image, config)
        assert art.rows == [" .:-=+*%@#"]

    def test_default_width(self):
        image = Image.new("RGB", (300, 150), (0, 0, 0))
        art = ProcessService().image_to_ascii(image, AsciiConfig())
        assert art.width == 100
        assert all(len(row) == 100 for row in art.rows)
        assert len(art.rows) == art.height


class TestPreviews:
    def test_luminance_preview(self, step_image):
        config = AsciiConfig(target_width=4, **IDENTITY)
        preview = ProcessService().luminance_preview(step_image, config)
        assert preview.mode == "L"
        assert np.asarray(preview).tolist() == [[0, 0, 255, 255], [0, 0, 255, 255]]

    def test_edge_preview_follows_sensitivity(self, step_image):
        service = ProcessService()
        low = service.edge_preview(step_image, AsciiConfig(target_width=4, edge_sensitivity=100, **IDENTITY))
        assert np.asarray(low).tolist() == [[0, 255, 255, 0], [0, 255, 255, 0]]
        high = service.edge_preview(step_image, AsciiConfig(target_width=4, edge_sensitivity=2000, **IDENTITY))
        assert not np.asarray(high).any()


# ---------------------------------------------------------------------------
# ExportService
# ---------------------------------------------------------------------------


class TestExport:
    def test_save_text(self, tmp_path):
        art = AsciiArt(text=" #\n# \n", width=2, height=2)
        saved = ExportService().save_text(art, tmp_path / "art.txt")
        assert saved.is_absolute()
        assert saved.read_bytes() == b" #\n# \n"

    def test_unwritable_path(self, tmp_path):
        art = AsciiArt(text="x\n", width=1, height=1)
        with pytest.raises(OSError):
            ExportService().save_text(art, tmp_path / "missing" / "art.txt")
