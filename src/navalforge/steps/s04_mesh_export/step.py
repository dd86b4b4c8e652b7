"""Step 04: Mesh export, geometry groups to OBJ (+ optional GLB).

Reads the hull from s02 and the components from s03 and writes:
- <stem>.obj: Wavefront OBJ text, one object/group per geometry group
- <stem>.glb: glTF Binary for viewers and game engines (optional)
"""

from __future__ import annotations

import logging
from typing import ClassVar

from navalforge.core.ship_spec import parse_ship_spec
from navalforge.core.step_base import BaseStep
from navalforge.utils.io import load_geometries, read_json
from .config import MeshExportConfig
from .contracts import MeshExportInput, MeshExportOutput

logger = logging.getLogger(__name__)


class MeshExportStep(BaseStep[MeshExportInput, MeshExportOutput, MeshExportConfig]):
    name: ClassVar[str] = "mesh_export"
    input_type: ClassVar = MeshExportInput
    output_type: ClassVar = MeshExportOutput
    config_type: ClassVar = MeshExportConfig

    def validate_inputs(self, inputs: MeshExportInput) -> bool:
        for path in (inputs.hull_file, inputs.components_file, inputs.ship_file):
            if path is not None and not path.exists():
                logger.error(f"Input not found: {path}")
                return False
        return True

    def _metadata(self, inputs: MeshExportInput) -> dict:
        if not (self.config.include_metadata and inputs.ship_file):
            return {}
        dims = parse_ship_spec(read_json(inputs.ship_file)).dimensions
        return {"length": dims.length, "beam": dims.beam, "draft": dims.draft}

    def run(self, inputs: MeshExportInput) -> MeshExportOutput:
        from ._obj_writer import export_obj, mesh_stats

        output_dir = self.data_root / "processed"
        output_dir.mkdir(parents=True, exist_ok=True)

        geometries = load_geometries(inputs.hull_file)
        if inputs.components_file is not None:
            geometries += load_geometries(inputs.components_file)

        stem = self.config.filename_stem
        obj_path = None
        glb_path = None

        if self.config.export_obj:
            export = export_obj(geometries, self._metadata(inputs))
            stats = export.stats
            obj_path = output_dir / f"{stem}.obj"
            obj_path.write_text(export.text, encoding="utf-8")
        else:
            stats = mesh_stats(geometries)

        # --- GLB export ---
        if self.config.export_glb:
            from ._glb_writer import _has_trimesh, write_glb

            if _has_trimesh():
                color_map = {"default": self.config.color_component, "hull": self.config.color_hull}
                glb_path = write_glb(geometries, output_dir / f"{stem}.glb", color_map)
            else:
                logger.warning(
                    "trimesh not installed — skipping GLB export. "
                    "Install with: pip install trimesh"
                )

        logger.info(
            f"Mesh export complete: "
            f"OBJ={'yes' if obj_path else 'no'}, "
            f"GLB={'yes' if glb_path else 'no'}"
        )

        return MeshExportOutput(
            obj_path=obj_path,
            glb_path=glb_path,
            num_groups=len(geometries),
            num_vertices=stats.vertex_count,
            num_faces=stats.face_count,
            bbox_min=stats.bbox_min,
            bbox_max=stats.bbox_max,
        )
