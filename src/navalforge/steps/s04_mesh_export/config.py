"""Configuration for Step 04: Mesh export."""

from pydantic import BaseModel, Field


class MeshExportConfig(BaseModel):
    export_obj: bool = Field(True, description="Export Wavefront OBJ text")
    export_glb: bool = Field(False, description="Export GLB file (requires trimesh)")
    filename_stem: str = Field("ship", description="Output file name without extension")
    include_metadata: bool = Field(True, description="Write ship dimensions into the OBJ header")
    color_hull: list[float] = Field(
        default=[0.45, 0.47, 0.5, 1.0], description="Hull color RGBA (GLB only)"
    )
    color_component: list[float] = Field(
        default=[0.6, 0.62, 0.65, 1.0], description="Component color RGBA (GLB only)"
    )
