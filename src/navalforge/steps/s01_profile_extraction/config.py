"""Configuration for Step 01: Blueprint views to profile curves."""

from typing import Literal

from pydantic import BaseModel, Field


class SmoothingConfig(BaseModel):
    method: Literal["moving_average", "median", "gaussian"] = Field(
        "moving_average", description="Smoothing filter applied after normalization"
    )
    window_size: int = Field(5, ge=0, description="Odd window size; <= 1 disables smoothing")
    sigma: float | None = Field(None, gt=0, description="Gaussian sigma (None = window_size / 6)")


class ProfileExtractionConfig(BaseModel):
    background_mode: Literal["auto", "corners", "edges", "mode", "custom"] = Field(
        "auto",
        description="'auto' compares corners with the color histogram; others force one estimator",
    )
    custom_background: list[float] | None = Field(
        None, min_length=3, max_length=3, description="RGB background for background_mode='custom'"
    )
    threshold: int = Field(48, ge=0, le=255, description="RGB distance cutoff for content pixels")
    min_feature_size: int = Field(1, ge=1, description="Column heights below this (pixels) count as empty")
    resolution: int | None = Field(None, ge=1, description="Profile sample count (None = image width)")
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)

    extract_sheer: bool = Field(True, description="Also trace the deck sheer line from the side view")
    detect_turrets: bool = Field(True, description="Detect turret candidates on the plan view (needs OpenCV)")
    view_order: Literal["side_top", "top_side"] = Field(
        "side_top", description="Stacking order of views in a combined blueprint (upper first)"
    )
