"""Shared fixtures: synthetic images and small palettes."""

import numpy as np
import pytest

from rct_pixel_tool.palettes import load_palette


def solid_rgba(width: int, height: int, rgb, alpha: int = 255) -> np.ndarray:
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., :3] = rgb
    arr[..., 3] = alpha
    return arr


@pytest.fixture
def primary_palette():
    return load_palette(
        [
            {'color': '#ff0000', 'name': 'Red'},
            {'color': '#ffffff', 'name': 'White'},
            {'color': '#000000'},
        ],
        palette_id='primary',
    )


@pytest.fixture
def half_red_half_white() -> np.ndarray:
    """800x400: left half pure red, right half pure white."""
    arr = solid_rgba(800, 400, (255, 255, 255))
    arr[:, :400, :3] = (255, 0, 0)
    return arr


@pytest.fixture
def solid():
    """Factory for uniform RGBA arrays: solid(width, height, rgb, alpha=255)."""
    return solid_rgba
