"""Step 03: Place turrets, superstructure and funnels on the deck.

Feature positions come from the ship description. When it lists no
turrets, candidates detected on the plan view in s01 are used instead.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from navalforge.core.contracts import ProfileData
from navalforge.core.ship_spec import parse_ship_spec
from navalforge.core.step_base import BaseStep
from navalforge.utils.io import load_profile, read_json, save_geometries
from .config import ComponentPlacementConfig
from .contracts import ComponentPlacementInput, ComponentPlacementOutput

logger = logging.getLogger(__name__)

FLAT_PROFILE_RESOLUTION = 100


class ComponentPlacementStep(
    BaseStep[ComponentPlacementInput, ComponentPlacementOutput, ComponentPlacementConfig]
):
    name: ClassVar[str] = "component_placement"
    input_type: ClassVar = ComponentPlacementInput
    output_type: ClassVar = ComponentPlacementOutput
    config_type: ClassVar = ComponentPlacementConfig

    def validate_inputs(self, inputs: ComponentPlacementInput) -> bool:
        if not inputs.ship_file.exists():
            logger.error(f"Ship description not found: {inputs.ship_file}")
            return False
        if inputs.top_profile_file is not None and not inputs.top_profile_file.exists():
            logger.error(f"Top profile not found: {inputs.top_profile_file}")
            return False
        return True

    def run(self, inputs: ComponentPlacementInput) -> ComponentPlacementOutput:
        from ._placement import place_components

        parsed = parse_ship_spec(read_json(inputs.ship_file))
        hints = parsed.hints
        issues = list(parsed.issues)

        if not hints.turret_positions and self.config.use_detected_turrets and inputs.turret_candidates:
            logger.info(f"Using {len(inputs.turret_candidates)} detected turret positions")
            hints = hints.model_copy(update={"turret_positions": sorted(inputs.turret_candidates)})
            issues.append("turretPositions: none supplied; using positions detected on the plan view")

        if inputs.top_profile_file is not None:
            top = load_profile(inputs.top_profile_file)
        else:
            logger.warning("No top profile, sizing turrets from the full beam")
            top = ProfileData.flat(FLAT_PROFILE_RESOLUTION)

        placed = place_components(parsed.dimensions, top, hints, self.config)
        groups = placed.groups()
        components_file = save_geometries(groups, self.output_dir / "components.json")

        return ComponentPlacementOutput(
            components_file=components_file,
            groups=[g.group for g in groups],
            issues=issues + placed.issues,
        )
