"""
Shared fixtures for the image_ascii test suite.

Images are generated on the fly with Pillow; nothing is read from disk
outside of pytest's tmp_path.
"""

from pathlib import Path
from typing import Callable, List

import numpy as np
import pytest
from PIL import Image


def gray_rows_to_image(rows: List[List[int]]) -> Image.Image:
    """Build an RGB image where every pixel has R = G = B = the given gray."""
    arr = np.asarray(rows, dtype=np.uint8)
    return Image.fromarray(np.stack([arr, arr, arr], axis=-1))


@pytest.fixture
def write_image(tmp_path) -> Callable[..., Path]:
    """Factory: save a Pillow image under tmp_path and return its path."""

    def _write(image: Image.Image, name: str = "source.png") -> Path:
        path = tmp_path / name
        image.save(path)
        return path

    return _write


@pytest.fixture
def step_image() -> Image.Image:
    """4x2 image: left half black, right half white."""
    return gray_rows_to_image([[0, 0, 255, 255], [0, 0, 255, 255]])
