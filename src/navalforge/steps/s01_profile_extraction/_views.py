"""Blueprint view splitting.

A combined blueprint usually stacks a side (profile) view and a top (plan)
view. Content is projected onto the Y axis to find horizontal bands, then
each band is projected onto X to find its horizontal extent.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

import numpy as np

from navalforge.core.contracts import PixelBuffer, ViewRegion
from navalforge.core.errors import ValidationError
from ._profile import content_mask

logger = logging.getLogger(__name__)

ROW_FILL_FRACTION = 0.01
MIN_BAND_FRACTION = 0.05

ViewOrder = Literal["side_top", "top_side"]


def _bands(counts: np.ndarray, min_count: float, min_length: float) -> list[tuple[int, int]]:
    bands: list[tuple[int, int]] = []
    start = None
    for i, c in enumerate(counts):
        if c > min_count and start is None:
            start = i
        elif c <= min_count and start is not None:
            if i - start > min_length:
                bands.append((start, i))
            start = None
    if start is not None and len(counts) - start > min_length:
        bands.append((start, len(counts)))
    return bands


def find_view_regions(
    buffer: PixelBuffer,
    background: Sequence[float],
    threshold: float,
) -> list[ViewRegion]:
    """Locate distinct drawing regions, largest first."""
    mask = content_mask(buffer, background, threshold)
    h, w = mask.shape

    row_counts = mask.sum(axis=1)
    regions: list[ViewRegion] = []
    for y0, y1 in _bands(row_counts, w * ROW_FILL_FRACTION, h * MIN_BAND_FRACTION):
        col_counts = mask[y0:y1].sum(axis=0)
        cols = np.flatnonzero(col_counts > (y1 - y0) * ROW_FILL_FRACTION)
        if cols.size == 0:
            continue
        regions.append(ViewRegion(x=int(cols[0]), y=y0, width=int(cols[-1] - cols[0] + 1), height=y1 - y0))

    regions.sort(key=lambda r: (-r.area, r.y))
    logger.debug(f"Found {len(regions)} view regions: {regions}")
    return regions


def crop(buffer: PixelBuffer, region: ViewRegion) -> PixelBuffer:
    """Copy a rectangular region into a new PixelBuffer."""
    if region.width < 1 or region.height < 1:
        raise ValidationError(f"Empty crop region {region}")
    if region.x < 0 or region.y < 0 or region.x + region.width > buffer.width or region.y + region.height > buffer.height:
        raise ValidationError(f"Crop region {region} outside {buffer.width}x{buffer.height} image")
    return PixelBuffer(
        buffer.pixels[region.y : region.y + region.height, region.x : region.x + region.width].copy()
    )


def split_blueprint(
    buffer: PixelBuffer,
    background: Sequence[float],
    threshold: float,
    view_order: ViewOrder = "side_top",
) -> tuple[PixelBuffer, PixelBuffer]:
    """Split a two-view blueprint into (top_view, side_view) crops."""
    regions = find_view_regions(buffer, background, threshold)
    if len(regions) < 2:
        raise ValidationError(f"Expected two drawing regions in blueprint, found {len(regions)}")

    upper, lower = sorted(regions[:2], key=lambda r: r.y)
    side, top = (upper, lower) if view_order == "side_top" else (lower, upper)
    logger.info(f"Blueprint split: side view {side}, top view {top}")
    return crop(buffer, top), crop(buffer, side)
