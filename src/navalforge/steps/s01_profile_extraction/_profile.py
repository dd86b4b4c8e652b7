"""Column-wise silhouette profile extraction.

For every column the topmost and bottommost content rows are located,
where content means an RGB distance from the background above the
threshold. Column heights are normalized by the global peak so the widest
(plan view) or tallest (side view) station maps to 1.0.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

import numpy as np

from navalforge.core.contracts import PixelBuffer, ProfileBounds, ProfileData
from navalforge.core.errors import ValidationError, warn_degenerate
from navalforge.utils.geometry import round_half_up

logger = logging.getLogger(__name__)

Measure = Literal["extent", "top_edge"]


def content_mask(buffer: PixelBuffer, background: Sequence[float], threshold: float) -> np.ndarray:
    """Boolean (H, W) mask of pixels farther than ``threshold`` from the background."""
    bg = np.asarray(background, dtype=np.float64).reshape(1, 1, 3)
    dist = np.sqrt(((buffer.rgb() - bg) ** 2).sum(axis=2))
    return dist > threshold


def _column_heights(mask: np.ndarray, measure: Measure) -> np.ndarray:
    h = mask.shape[0]
    has_content = mask.any(axis=0)
    top = np.argmax(mask, axis=0)
    if measure == "top_edge":
        raw = (h - top).astype(np.float64)
    else:
        bottom = h - 1 - np.argmax(mask[::-1, :], axis=0)
        raw = (bottom - top + 1).astype(np.float64)
    raw[~has_content] = 0.0
    return raw


def _resample_indices(width: int, resolution: int) -> np.ndarray:
    if resolution == 1:
        return np.zeros(1, dtype=np.int64)
    return np.array(
        [round_half_up(i * (width - 1) / (resolution - 1)) for i in range(resolution)],
        dtype=np.int64,
    )


def extract_profile(
    buffer: PixelBuffer,
    background: Sequence[float],
    threshold: float,
    min_feature_size: int = 1,
    resolution: int | None = None,
    measure: Measure = "extent",
) -> ProfileData:
    """Scan a raster column by column into a normalized profile curve.

    Args:
        buffer: Source pixels (never modified).
        background: RGB background color.
        threshold: Color distance cutoff, 0..255.
        min_feature_size: Column heights (pixels) below this are treated as empty.
        resolution: Output sample count; defaults to the image width.
        measure: 'extent' (top-to-bottom span) or 'top_edge' (sheer line height).

    Returns:
        ProfileData whose bounds describe the raw pixel heights.
    """
    if not 0 <= threshold <= 255:
        raise ValidationError(f"threshold {threshold} outside 0..255")
    if min_feature_size < 1:
        raise ValidationError(f"min_feature_size must be >= 1, got {min_feature_size}")
    if resolution is not None and resolution < 1:
        raise ValidationError(f"resolution must be >= 1, got {resolution}")
    if measure not in ("extent", "top_edge"):
        raise ValidationError(f"Unknown profile measure '{measure}'")

    if buffer.width == 1:
        warn_degenerate("Profile source is 1 pixel wide; curve has a single sample", logger)

    raw = _column_heights(content_mask(buffer, background, threshold), measure)
    raw[raw < min_feature_size] = 0.0

    if resolution is not None and resolution != buffer.width:
        raw = raw[_resample_indices(buffer.width, resolution)]

    nonzero = np.flatnonzero(raw)
    if nonzero.size == 0:
        warn_degenerate("No content found in profile source; returning zero curve", logger)
        return ProfileData(curve=np.zeros(raw.size), bounds=ProfileBounds())

    peak_index = int(np.argmax(raw))
    peak = float(raw[peak_index])
    bounds = ProfileBounds(
        min_index=int(nonzero[0]),
        max_index=int(nonzero[-1]),
        peak_index=peak_index,
        peak_value=peak,
    )
    curve = np.clip(raw / peak, 0.0, 1.0)
    logger.debug(
        f"Profile: {raw.size} samples, content columns {bounds.min_index}..{bounds.max_index}, "
        f"peak {peak:.0f}px at {peak_index}"
    )
    return ProfileData(curve=curve, bounds=bounds)
