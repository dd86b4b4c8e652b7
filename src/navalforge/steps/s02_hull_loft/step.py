"""Step 02: Loft the hull from beam and draft profiles.

A missing view falls back to the parametric taper so that a ship can
still be generated from a single blueprint view.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from navalforge.core.ship_spec import parse_ship_spec
from navalforge.core.step_base import BaseStep
from navalforge.utils.io import load_profile, read_json, save_geometries
from .config import HullLoftConfig
from .contracts import HullLoftInput, HullLoftOutput

logger = logging.getLogger(__name__)


class HullLoftStep(BaseStep[HullLoftInput, HullLoftOutput, HullLoftConfig]):
    name: ClassVar[str] = "hull_loft"
    input_type: ClassVar = HullLoftInput
    output_type: ClassVar = HullLoftOutput
    config_type: ClassVar = HullLoftConfig

    def validate_inputs(self, inputs: HullLoftInput) -> bool:
        if not inputs.ship_file.exists():
            logger.error(f"Ship description not found: {inputs.ship_file}")
            return False
        for path in (inputs.top_profile_file, inputs.side_profile_file, inputs.sheer_profile_file):
            if path is not None and not path.exists():
                logger.error(f"Profile not found: {path}")
                return False
        return True

    def run(self, inputs: HullLoftInput) -> HullLoftOutput:
        from ._loft import loft_hull, parametric_profile

        parsed = parse_ship_spec(read_json(inputs.ship_file))
        fallback = parametric_profile(self.config.fallback_resolution, self.config.fallback_taper_exponent)

        if inputs.top_profile_file is not None:
            top = load_profile(inputs.top_profile_file)
        else:
            logger.warning("No top profile, using parametric beam taper")
            top = fallback
        if inputs.side_profile_file is not None:
            side = load_profile(inputs.side_profile_file)
        else:
            logger.warning("No side profile, using parametric draft taper")
            side = fallback
        sheer = load_profile(inputs.sheer_profile_file) if inputs.sheer_profile_file else None

        hull = loft_hull(top, side, parsed.dimensions, self.config, sheer=sheer)
        hull_file = save_geometries([hull], self.output_dir / "hull.json")

        return HullLoftOutput(
            hull_file=hull_file,
            num_vertices=hull.vertex_count,
            num_faces=hull.face_count,
        )
