"""Shared pytest fixtures and markers for step tests."""

from pathlib import Path

import numpy as np
import pytest

from navalforge.core.contracts import PixelBuffer


def _has_cv2() -> bool:
    try:
        import cv2  # noqa: F401
        return True
    except ImportError:
        return False


def _has_trimesh() -> bool:
    try:
        import trimesh  # noqa: F401
        return True
    except ImportError:
        return False


needs_cv2 = pytest.mark.skipif(not _has_cv2(), reason="opencv not installed")
needs_trimesh = pytest.mark.skipif(not _has_trimesh(), reason="trimesh not installed")


@pytest.fixture
def blueprint_buffer() -> PixelBuffer:
    """Two stacked views: side view (rows 10-39) above plan view (rows 70-109)."""
    canvas = np.full((120, 200, 4), 255, dtype=np.uint8)
    canvas[10:40, 15:185, :3] = 0
    canvas[70:110, 20:180, :3] = 0
    return PixelBuffer(canvas)


@pytest.fixture
def write_image(data_root: Path):
    """Save a PixelBuffer under raw/ as PNG and return its path."""
    from navalforge.utils.io import save_pixel_buffer

    pytest.importorskip("cv2")

    def _write(buffer: PixelBuffer, name: str) -> Path:
        return save_pixel_buffer(buffer, data_root / "raw" / name)

    return _write
