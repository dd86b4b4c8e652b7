"""In-memory end-to-end generation: two views + ship data → OBJ text.

Runs the same stage functions the file-based steps call, without touching
``data_root``. Decoding images is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from navalforge.steps.s01_profile_extraction.config import ProfileExtractionConfig
from navalforge.steps.s02_hull_loft.config import HullLoftConfig
from navalforge.steps.s03_component_placement.config import ComponentPlacementConfig
from .contracts import Dimensions, GeometryHints, MeshStats, ObjGeometry, PixelBuffer, ProfileData

logger = logging.getLogger(__name__)


class MeshPipelineConfig(BaseModel):
    """Stage configs bundled for ``build_ship_mesh``.

    Only text OBJ is produced in memory, so the export stage takes just the
    metadata flag; GLB output and file naming belong to the file-based step.
    """

    profile: ProfileExtractionConfig = Field(default_factory=ProfileExtractionConfig)
    hull: HullLoftConfig = Field(default_factory=HullLoftConfig)
    components: ComponentPlacementConfig = Field(default_factory=ComponentPlacementConfig)
    include_metadata: bool = True


@dataclass
class ShipMeshResult:
    top_profile: ProfileData
    side_profile: ProfileData
    geometries: list[ObjGeometry]
    text: str
    stats: MeshStats
    issues: list[str] = field(default_factory=list)


def build_ship_mesh(
    top_view: PixelBuffer,
    side_view: PixelBuffer,
    dimensions: Dimensions,
    hints: GeometryHints | None = None,
    config: MeshPipelineConfig | None = None,
) -> ShipMeshResult:
    """Generate a ship mesh from a plan view and a side view.

    Args:
        top_view: Plan view; its profile gives the beam distribution.
        side_view: Elevation; its profile gives the draft distribution.
        dimensions: Real-world size in meters.
        hints: Feature positions; defaults apply when omitted.
        config: Per-stage settings.

    Returns:
        ShipMeshResult with profiles, geometry groups (hull first), OBJ text
        and mesh statistics.
    """
    from navalforge.steps.s01_profile_extraction._trace import trace_view
    from navalforge.steps.s02_hull_loft._loft import loft_hull
    from navalforge.steps.s03_component_placement._placement import place_components
    from navalforge.steps.s04_mesh_export._obj_writer import export_obj

    config = config or MeshPipelineConfig()
    hints = hints if hints is not None else GeometryHints()

    top, _ = trace_view(top_view, config.profile)
    side, side_bg = trace_view(side_view, config.profile)
    sheer = None
    if config.profile.extract_sheer and config.hull.sheer_height > 0:
        sheer, _ = trace_view(side_view, config.profile, measure="top_edge", background=side_bg)

    hull = loft_hull(top, side, dimensions, config.hull, sheer=sheer)
    placed = place_components(dimensions, top, hints, config.components)
    geometries = [hull, *placed.groups()]

    metadata = {}
    if config.include_metadata:
        metadata = {"length": dimensions.length, "beam": dimensions.beam, "draft": dimensions.draft}
    export = export_obj(geometries, metadata)

    logger.info(
        f"Built ship mesh: {len(geometries)} groups, "
        f"{export.stats.vertex_count} vertices, {export.stats.face_count} faces"
    )
    return ShipMeshResult(
        top_profile=top,
        side_profile=side,
        geometries=geometries,
        text=export.text,
        stats=export.stats,
        issues=list(placed.issues),
    )
