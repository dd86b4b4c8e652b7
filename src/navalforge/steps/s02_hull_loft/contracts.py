"""I/O contracts for Step 02: Hull lofting."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class HullLoftInput(BaseModel):
    ship_file: Path = Field(..., description="Ship description JSON (dimensions + geometry hints)")
    top_profile_file: Optional[Path] = Field(None, description="top_profile.json from s01")
    side_profile_file: Optional[Path] = Field(None, description="side_profile.json from s01")
    sheer_profile_file: Optional[Path] = Field(None, description="sheer_profile.json from s01")


class HullLoftOutput(BaseModel):
    hull_file: Path = Field(..., description="Path to hull.json geometry group")
    num_vertices: int = Field(0)
    num_faces: int = Field(0)
