"""I/O contracts for Step 03: Component placement."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ComponentPlacementInput(BaseModel):
    ship_file: Path = Field(..., description="Ship description JSON (dimensions + geometry hints)")
    top_profile_file: Optional[Path] = Field(None, description="top_profile.json from s01")
    turret_candidates: list[float] = Field(
        default_factory=list, description="Turret positions detected by s01"
    )


class ComponentPlacementOutput(BaseModel):
    components_file: Path = Field(..., description="Path to components.json geometry groups")
    groups: list[str] = Field(default_factory=list, description="Component group names in order")
    issues: list[str] = Field(default_factory=list, description="Skipped or defaulted hints")
