"""Background color estimation for blueprint rasters.

Three estimators are available:
- corners: mean of small square patches at the four image corners
- edges:   mean of every border pixel
- mode:    peak of a coarse color histogram (8 levels per channel)

When no mode is requested, corners and mode are both computed. If they
agree the corner estimate is trusted; otherwise the histogram peak wins,
which is robust when the drawing touches the image border.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from navalforge.core.contracts import BackgroundEstimate, PixelBuffer
from navalforge.core.errors import ValidationError

logger = logging.getLogger(__name__)

AGREEMENT_DISTANCE = 32.0
QUANT_STEP = 32  # 256 / 8 levels

BACKGROUND_MODES = ("corners", "edges", "mode", "custom")


def _estimate(samples: np.ndarray, method: str) -> BackgroundEstimate:
    """Mean color of (N, 3) samples, confidence = share within agreement distance."""
    mean = samples.mean(axis=0)
    dist = np.linalg.norm(samples - mean[None, :], axis=1)
    confidence = float(np.count_nonzero(dist < AGREEMENT_DISTANCE) / len(samples))
    return BackgroundEstimate(tuple(float(c) for c in mean), confidence, method)


def _corner_patch_size(buffer: PixelBuffer) -> int:
    return max(1, min(buffer.width, buffer.height) // 10)


def detect_corners(buffer: PixelBuffer) -> BackgroundEstimate:
    rgb = buffer.rgb()
    k = _corner_patch_size(buffer)
    patches = [
        rgb[:k, :k],
        rgb[:k, -k:],
        rgb[-k:, :k],
        rgb[-k:, -k:],
    ]
    samples = np.concatenate([p.reshape(-1, 3) for p in patches], axis=0)
    return _estimate(samples, "corners")


def detect_edges(buffer: PixelBuffer) -> BackgroundEstimate:
    rgb = buffer.rgb()
    h, w = rgb.shape[:2]
    mask = np.zeros((h, w), dtype=bool)
    mask[0, :] = mask[-1, :] = True
    mask[:, 0] = mask[:, -1] = True
    return _estimate(rgb[mask], "edges")


def detect_mode(buffer: PixelBuffer) -> BackgroundEstimate:
    pixels = buffer.pixels[:, :, :3].reshape(-1, 3)
    q = (pixels // QUANT_STEP).astype(np.int64)
    keys = q[:, 0] * 64 + q[:, 1] * 8 + q[:, 2]
    counts = np.bincount(keys, minlength=512)
    # argmax returns the lowest key on ties
    peak = int(np.argmax(counts))
    members = pixels[keys == peak].astype(np.float64)
    color = members.mean(axis=0)
    confidence = float(counts[peak] / len(keys))
    return BackgroundEstimate(tuple(float(c) for c in color), confidence, "mode")


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def detect_background(
    buffer: PixelBuffer,
    mode: str | None = None,
    custom_color: Sequence[float] | None = None,
) -> BackgroundEstimate:
    """Estimate the background color of a raster.

    Args:
        buffer: Source pixels (never modified).
        mode: 'corners', 'edges', 'mode', 'custom', or None for automatic.
        custom_color: RGB triple, required for mode='custom'.

    Returns:
        BackgroundEstimate with color, confidence in [0, 1] and the method used.
    """
    if mode == "custom":
        if custom_color is None or len(custom_color) != 3:
            raise ValidationError("background mode 'custom' requires an RGB triple")
        if any(not 0 <= c <= 255 for c in custom_color):
            raise ValidationError(f"custom background {tuple(custom_color)} outside 0..255")
        return BackgroundEstimate(tuple(float(c) for c in custom_color), 1.0, "custom")
    if mode == "corners":
        return detect_corners(buffer)
    if mode == "edges":
        return detect_edges(buffer)
    if mode == "mode":
        return detect_mode(buffer)
    if mode is not None and mode != "auto":
        raise ValidationError(f"Unknown background mode '{mode}', expected one of {BACKGROUND_MODES}")

    corners = detect_corners(buffer)
    hist = detect_mode(buffer)
    gap = color_distance(corners.color, hist.color)
    if gap < AGREEMENT_DISTANCE:
        logger.debug(f"Background: corners and histogram agree (gap={gap:.1f})")
        return BackgroundEstimate(corners.color, max(corners.confidence, hist.confidence), "corners")

    logger.debug(f"Background: corners disagree with histogram (gap={gap:.1f}), using mode")
    return hist
