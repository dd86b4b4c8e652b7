"""Turret candidate detection on plan views.

Main-battery turrets show up as compact, roughly round blobs close to the
centerline. Connected components are filtered by size, aspect ratio,
fill density and distance from the centerline.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from navalforge.core.contracts import PixelBuffer
from ._profile import content_mask

logger = logging.getLogger(__name__)

MIN_AREA_FRACTION = 0.002
ASPECT_RANGE = (0.6, 1.4)
MIN_DENSITY = 0.5
CENTERLINE_TOLERANCE = 0.15


def detect_turret_positions(
    buffer: PixelBuffer,
    background: Sequence[float],
    threshold: float,
) -> list[float]:
    """Return sorted normalized X positions of turret-like blobs."""
    import cv2

    mask = content_mask(buffer, background, threshold).astype(np.uint8)
    h, w = mask.shape
    count, _, stats, centroids = cv2.connectedComponentsWithStats(mask, connectivity=4)

    positions: list[float] = []
    for label in range(1, count):
        bw = int(stats[label, cv2.CC_STAT_WIDTH])
        bh = int(stats[label, cv2.CC_STAT_HEIGHT])
        area = int(stats[label, cv2.CC_STAT_AREA])
        cx, cy = centroids[label]

        if area <= w * h * MIN_AREA_FRACTION:
            continue
        ratio = bw / bh
        if not ASPECT_RANGE[0] < ratio < ASPECT_RANGE[1]:
            continue
        if area / (bw * bh) <= MIN_DENSITY:
            continue
        if abs(cy - h / 2) >= h * CENTERLINE_TOLERANCE:
            continue
        positions.append(float(cx / max(w - 1, 1)))

    positions.sort()
    logger.info(f"Detected {len(positions)} turret candidates from {count - 1} blobs")
    return positions
