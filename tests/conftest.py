"""Shared pytest fixtures for NavalForge pipeline tests."""

import json
from pathlib import Path

import numpy as np
import pytest

from navalforge.core.contracts import Dimensions, PixelBuffer


def draw_canvas(width: int, height: int, color=(255, 255, 255)) -> np.ndarray:
    """Opaque RGBA canvas filled with one color."""
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, :3] = color
    canvas[:, :, 3] = 255
    return canvas


def draw_hull_silhouette(width: int, height: int, margin: int = 10) -> np.ndarray:
    """White canvas with a dark, symmetric, pointed-ends hull shape."""
    canvas = draw_canvas(width, height)
    center = height / 2.0
    max_half = height / 2.0 - margin
    for x in range(margin, width - margin):
        t = (x - margin) / (width - 2 * margin - 1)
        half = max_half * (1.0 - abs(2.0 * t - 1.0) ** 2.5)
        y0, y1 = int(round(center - half)), int(round(center + half))
        canvas[y0 : y1 + 1, x, :3] = 20
    return canvas


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def rectangle_buffer() -> PixelBuffer:
    """100x50 white image with an 80x30 black rectangle starting at x=10."""
    canvas = draw_canvas(100, 50)
    canvas[10:40, 10:90, :3] = 0
    return PixelBuffer(canvas)


@pytest.fixture
def top_view_buffer() -> PixelBuffer:
    return PixelBuffer(draw_hull_silhouette(200, 60))


@pytest.fixture
def side_view_buffer() -> PixelBuffer:
    canvas = draw_canvas(200, 40)
    canvas[12:30, 15:185, :3] = 30
    return PixelBuffer(canvas)


@pytest.fixture
def dimensions() -> Dimensions:
    return Dimensions(length=200.0, beam=30.0, draft=10.0)


@pytest.fixture
def ship_data() -> dict:
    """Ship description in the identification-service shape."""
    return {
        "name": "Test Battleship",
        "realDimensions": {"length": 200.0, "beam": 30.0, "draft": 10.0},
        "geometry": {
            "turrets": [0.25, 0.75],
            "superstructure": {"start": 0.4, "end": 0.6},
            "funnels": [0.5],
        },
    }


@pytest.fixture
def ship_json(data_root: Path, ship_data: dict) -> Path:
    """Write ship_data to raw/ship.json."""
    path = data_root / "raw" / "ship.json"
    with open(path, "w") as f:
        json.dump(ship_data, f)
    return path
