"""I/O contracts for Step 01: Blueprint views to profile curves."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ProfileExtractionInput(BaseModel):
    top_view_path: Optional[Path] = Field(None, description="Plan view image (beam distribution)")
    side_view_path: Optional[Path] = Field(None, description="Profile view image (draft distribution)")
    blueprint_path: Optional[Path] = Field(
        None, description="Combined blueprint; split into views when per-view images are absent"
    )


class ProfileExtractionOutput(BaseModel):
    top_profile_file: Optional[Path] = Field(None, description="Path to top_profile.json")
    side_profile_file: Optional[Path] = Field(None, description="Path to side_profile.json")
    sheer_profile_file: Optional[Path] = Field(None, description="Path to sheer_profile.json")
    turret_candidates: list[float] = Field(
        default_factory=list, description="Normalized turret positions detected on the plan view"
    )
    background_color: list[float] = Field(default_factory=list, description="Plan view background RGB")
    background_confidence: float = Field(0.0, description="Confidence of the background estimate")
