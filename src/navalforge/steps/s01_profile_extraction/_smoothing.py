"""1-D smoothing filters for profile curves.

All filters use centred windows that shrink at the boundaries instead of
wrapping or zero-padding, so the output has the input's length. The linear
filters get that from scipy.ndimage by zero-padding both the curve and a
ones array, then dividing: each output is the weighted mean over the part of
the window that lies inside the curve.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

import numpy as np
from scipy import ndimage

from navalforge.core.errors import ValidationError

logger = logging.getLogger(__name__)

SmoothingMethod = Literal["moving_average", "median", "gaussian"]
SMOOTHING_METHODS = ("moving_average", "median", "gaussian")


def _normalized(filter_fn, curve: np.ndarray) -> np.ndarray:
    """Apply a linear filter with zero padding, renormalized by in-range weight."""
    weight = filter_fn(np.ones_like(curve))
    return filter_fn(curve) / weight


def moving_average(curve: np.ndarray, window_size: int) -> np.ndarray:
    return _normalized(
        lambda a: ndimage.uniform_filter1d(a, window_size, mode="constant", cval=0.0), curve
    )


def median_filter(curve: np.ndarray, window_size: int) -> np.ndarray:
    # ndimage.median_filter has no truncated-window mode, and a median is not
    # linear so the ones-array trick does not apply; windows are sliced here.
    half = window_size // 2
    n = len(curve)
    out = np.empty_like(curve)
    for i in range(n):
        out[i] = np.median(curve[max(0, i - half) : min(n, i + half + 1)])
    return out


def gaussian_filter(curve: np.ndarray, window_size: int, sigma: float | None = None) -> np.ndarray:
    half = window_size // 2
    sigma = sigma if sigma is not None else window_size / 6.0
    if sigma <= 0:
        raise ValidationError(f"gaussian sigma must be > 0, got {sigma}")
    offsets = np.arange(-half, half + 1, dtype=np.float64)
    kernel = np.exp(-0.5 * (offsets / sigma) ** 2)
    return _normalized(
        lambda a: ndimage.convolve1d(a, kernel, mode="constant", cval=0.0), curve
    )


def smooth(
    curve: Sequence[float] | np.ndarray,
    method: SmoothingMethod = "moving_average",
    window_size: int = 5,
    sigma: float | None = None,
) -> np.ndarray:
    """Smooth a curve, returning a new array of the same length.

    ``window_size <= 1`` returns the input values unchanged. Larger windows
    must be odd so the window stays centred on each sample.
    """
    values = np.asarray(curve, dtype=np.float64).reshape(-1)
    if method not in SMOOTHING_METHODS:
        raise ValidationError(f"Unknown smoothing method '{method}', expected one of {SMOOTHING_METHODS}")
    if window_size < 0:
        raise ValidationError(f"window_size must be >= 0, got {window_size}")
    if window_size <= 1 or values.size == 0:
        return values.copy()
    if window_size % 2 == 0:
        raise ValidationError(f"window_size must be odd, got {window_size}")

    if method == "moving_average":
        return moving_average(values, window_size)
    if method == "median":
        return median_filter(values, window_size)
    return gaussian_filter(values, window_size, sigma)
