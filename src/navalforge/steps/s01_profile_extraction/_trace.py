"""Background detection, extraction and smoothing chained for one view."""

from __future__ import annotations

import logging

import numpy as np

from navalforge.core.contracts import BackgroundEstimate, PixelBuffer, ProfileData
from .config import ProfileExtractionConfig
from ._background import detect_background
from ._profile import Measure, extract_profile
from ._smoothing import smooth

logger = logging.getLogger(__name__)


def trace_view(
    buffer: PixelBuffer,
    config: ProfileExtractionConfig,
    measure: Measure = "extent",
    background: BackgroundEstimate | None = None,
) -> tuple[ProfileData, BackgroundEstimate]:
    """Extract and smooth one view's profile.

    Smoothing rewrites the curve only; bounds keep describing the raw heights.
    """
    if background is None:
        mode = None if config.background_mode == "auto" else config.background_mode
        background = detect_background(buffer, mode=mode, custom_color=config.custom_background)

    profile = extract_profile(
        buffer,
        background.color,
        config.threshold,
        min_feature_size=config.min_feature_size,
        resolution=config.resolution,
        measure=measure,
    )
    sm = config.smoothing
    curve = np.clip(smooth(profile.curve, sm.method, sm.window_size, sm.sigma), 0.0, 1.0)
    logger.debug(
        f"Traced {buffer.width}x{buffer.height} view ({measure}), background {background.method} "
        f"conf={background.confidence:.2f}"
    )
    return profile.with_curve(curve), background
