"""Tests for data models and configuration validation."""

import math

import numpy as np
import pytest

from image_ascii.models.ascii_model import AsciiArt, AsciiConfig, PixelBuffer
from image_ascii.models.errors import (
    AsciiConversionError,
    InvalidDimensionsError,
    InvalidSensitivityError,
    MissingGradientDataError,
)


class TestPixelBuffer:
    def test_valid_buffer(self):
        buf = PixelBuffer(data=np.zeros(2 * 3 * 4, dtype=np.uint8), width=2, height=3)
        assert buf.as_array().shape == (3, 2, 4)

    def test_size_must_match_dimensions(self):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer(data=np.zeros(10, dtype=np.uint8), width=2, height=2)

    @pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (-2, 3)])
    def test_non_positive_dimensions(self, width, height):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer(data=np.zeros(0, dtype=np.uint8), width=width, height=height)

    def test_from_rgba_rows_defaults_alpha(self):
        buf = PixelBuffer.from_rgba_rows([[(1, 2, 3), (4, 5, 6, 7)]])
        assert (buf.width, buf.height) == (2, 1)
        assert buf.data.tolist() == [1, 2, 3, 255, 4, 5, 6, 7]

    def test_from_rgba_rows_rejects_ragged_rows(self):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer.from_rgba_rows([[(0, 0, 0), (0, 0, 0)], [(0, 0, 0)]])

    def test_from_rgba_rows_rejects_empty(self):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer.from_rgba_rows([])


class TestAsciiConfig:
    def test_defaults(self):
        config = AsciiConfig()
        assert config.target_width == 100
        assert config.enable_edge_detection is False
        assert config.edge_sensitivity == 100.0
        assert config.char_aspect == pytest.approx(0.55)

    def test_invalid_width(self):
        with pytest.raises(InvalidDimensionsError):
            AsciiConfig(target_width=0)

    @pytest.mark.parametrize("value", [math.inf, math.nan])
    def test_non_finite_sensitivity(self, value):
        with pytest.raises(InvalidSensitivityError):
            AsciiConfig(edge_sensitivity=value)

    def test_negative_sensitivity_is_allowed(self):
        assert AsciiConfig(edge_sensitivity=-5).edge_sensitivity == -5

    def test_invalid_char_aspect(self):
        with pytest.raises(ValueError):
            AsciiConfig(char_aspect=0)

    def test_with_changes_revalidates(self):
        config = AsciiConfig()
        changed = config.with_changes(enable_edge_detection=True, edge_sensitivity=250)
        assert changed.enable_edge_detection is True
        assert changed.edge_sensitivity == 250
        assert config.enable_edge_detection is False
        with pytest.raises(InvalidDimensionsError):
            config.with_changes(target_width=-1)


class TestAsciiArt:
    def test_rows_and_str(self):
        art = AsciiArt(text="ab\ncd\n", width=2, height=2)
        assert art.rows == ["ab", "cd"]
        assert str(art) == "ab\ncd\n"


class TestErrors:
    def test_hierarchy(self):
        for exc in (InvalidDimensionsError(0, 0), MissingGradientDataError(), InvalidSensitivityError(math.inf)):
            assert isinstance(exc, AsciiConversionError)
            assert isinstance(exc, ValueError)

    def test_dimensions_message(self):
        exc = InvalidDimensionsError(3, 0, "extra")
        assert (exc.width, exc.height) == (3, 0)
        assert "3 × 0" in str(exc)
        assert "extra" in str(exc)
