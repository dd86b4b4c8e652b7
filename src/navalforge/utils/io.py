"""I/O utilities: image decoding into PixelBuffer, JSON artifacts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from navalforge.core.contracts import ObjGeometry, PixelBuffer, ProfileData

logger = logging.getLogger(__name__)


# ── Images ───────────────────────────────────────────────────────────

def load_pixel_buffer(path: Path) -> PixelBuffer:
    """Decode an image file into an RGBA PixelBuffer (OpenCV)."""
    import cv2

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise FileNotFoundError(f"Could not decode image: {path}")

    if image.ndim == 2:
        rgba = cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    elif image.shape[2] == 4:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)

    if rgba.dtype != np.uint8:
        # 16-bit PNGs
        rgba = (rgba / 257).astype(np.uint8)

    logger.debug(f"Loaded {path.name}: {rgba.shape[1]}x{rgba.shape[0]}")
    return PixelBuffer(rgba)


def save_pixel_buffer(buffer: PixelBuffer, path: Path) -> Path:
    """Encode a PixelBuffer to an image file (OpenCV)."""
    import cv2

    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA))
    return path


# ── JSON artifacts ───────────────────────────────────────────────────

def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def save_profile(profile: ProfileData, path: Path) -> Path:
    return write_json(path, profile.to_dict())


def load_profile(path: Path) -> ProfileData:
    return ProfileData.from_dict(read_json(path))


def save_geometries(geometries: list[ObjGeometry], path: Path) -> Path:
    """Write geometry groups as ``{"groups": [...]}`` preserving order."""
    return write_json(path, {"groups": [g.to_dict() for g in geometries]})


def load_geometries(path: Path) -> list[ObjGeometry]:
    return [ObjGeometry.from_dict(g) for g in read_json(path)["groups"]]
