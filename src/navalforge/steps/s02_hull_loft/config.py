"""Configuration for Step 02: Hull lofting."""

from typing import Literal

from pydantic import BaseModel, Field


class HullLoftConfig(BaseModel):
    length_segments: int = Field(24, ge=1, description="Segments along the length (rings = segments + 1)")
    radial_segments: int = Field(8, ge=3, description="Segments around each cross-section ring")
    hull_shape: Literal["ellipse"] = Field("ellipse", description="Cross-section shape generator")
    min_section_radius: float = Field(
        1e-4, ge=0, description="Sections with a smaller half-beam or half-draft collapse to a point (meters)"
    )
    sheer_height: float = Field(
        0.0, ge=0, description="Deck rise at sheer value 1.0 (meters); 0 disables sheer"
    )
    fallback_taper_exponent: float = Field(
        2.5, gt=0, description="Exponent of the parametric taper used when a view is missing"
    )
    fallback_resolution: int = Field(100, ge=1, description="Sample count of the parametric taper")
