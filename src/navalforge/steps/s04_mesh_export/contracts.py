"""I/O contracts for Step 04: Mesh export (geometry groups → OBJ/GLB)."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class MeshExportInput(BaseModel):
    hull_file: Path = Field(..., description="hull.json from s02")
    components_file: Optional[Path] = Field(None, description="components.json from s03")
    ship_file: Optional[Path] = Field(None, description="Ship description, used for header metadata")


class MeshExportOutput(BaseModel):
    obj_path: Optional[Path] = Field(None, description="Path to exported .obj file")
    glb_path: Optional[Path] = Field(None, description="Path to exported .glb file")
    num_groups: int = Field(0, description="Number of geometry groups exported")
    num_vertices: int = Field(0, description="Total vertex count")
    num_faces: int = Field(0, description="Total face count")
    bbox_min: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    bbox_max: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
