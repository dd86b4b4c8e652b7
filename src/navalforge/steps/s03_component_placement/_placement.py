"""Procedural placement of superstructure, turrets and funnels.

Positions come from normalized hints along the length (0.0 = bow at z = 0,
1.0 = stern at z = length). Components stand on the main deck (y = draft)
unless they fall inside the superstructure span, in which case they sit on
its roof (superfiring turrets, funnels rising from the island).

Sizing is a fixed-fraction heuristic: turret radius scales with the local
hull half-beam sampled from the top profile, heights scale with draft.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from navalforge.core.contracts import Dimensions, GeometryHints, ObjGeometry, ProfileData
from navalforge.core.errors import warn_degenerate
from .config import ComponentPlacementConfig
from ._primitives import MeshBuilder

logger = logging.getLogger(__name__)

TOWARD_BOW = (0.0, 0.0, -1.0)
UP = (0.0, 1.0, 0.0)
BARREL_SPREAD = 1.2  # barrels spread across this multiple of turret radius


@dataclass
class PlacedComponents:
    turrets: list[ObjGeometry] = field(default_factory=list)
    superstructure: ObjGeometry | None = None
    funnels: list[ObjGeometry] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    def groups(self) -> list[ObjGeometry]:
        """All component groups in export order."""
        out = list(self.turrets)
        if self.superstructure is not None:
            out.append(self.superstructure)
        out.extend(self.funnels)
        return out


def superstructure_height(dimensions: Dimensions, config: ComponentPlacementConfig) -> float:
    return dimensions.draft * config.superstructure.height_fraction


def build_superstructure(
    dimensions: Dimensions,
    hints: GeometryHints,
    config: ComponentPlacementConfig,
) -> ObjGeometry | None:
    span = hints.superstructure
    if span is None:
        return None
    half_width = dimensions.beam * config.superstructure.width_fraction / 2.0
    deck = dimensions.draft
    builder = MeshBuilder()
    builder.add_box(
        (-half_width, deck, span.start * dimensions.length),
        (half_width, deck + superstructure_height(dimensions, config), span.end * dimensions.length),
    )
    center_z = (span.start + span.end) / 2.0 * dimensions.length
    return builder.build("superstructure", anchor=(0.0, deck, center_z))


def _base_height(position: float, dimensions: Dimensions, hints: GeometryHints, config: ComponentPlacementConfig) -> float:
    span = hints.superstructure
    if span is not None and span.contains(position):
        return dimensions.draft + superstructure_height(dimensions, config)
    return dimensions.draft


def build_turret(
    index: int,
    position: float,
    dimensions: Dimensions,
    top: ProfileData,
    hints: GeometryHints,
    config: ComponentPlacementConfig,
) -> ObjGeometry:
    cfg = config.turret
    local_half_beam = top.sample(position) * dimensions.beam / 2.0
    radius = max(local_half_beam * cfg.turret_radius, dimensions.beam * cfg.min_radius_fraction)
    height = dimensions.draft * cfg.turret_height
    base_y = _base_height(position, dimensions, hints, config)
    z = position * dimensions.length

    builder = MeshBuilder()
    builder.add_cylinder((0.0, base_y, z), UP, radius, height, cfg.sides)

    n = cfg.barrels_per_turret
    if n:
        spread = BARREL_SPREAD * radius
        offsets = np.linspace(-spread / 2.0, spread / 2.0, n) if n > 1 else np.zeros(1)
        barrel_y = base_y + height / 2.0
        barrel_length = radius * cfg.barrel_length
        # Barrels are centred on the turret axis so the group stays centred on z
        root_z = z + barrel_length / 2.0
        for x in offsets:
            builder.add_cylinder(
                (float(x), barrel_y, root_z),
                TOWARD_BOW,
                radius * cfg.barrel_radius,
                barrel_length,
                cfg.barrel_sides,
            )

    logger.debug(
        f"turret_{index}: t={position:.3f} z={z:.2f} r={radius:.2f} base_y={base_y:.2f} barrels={n}"
    )
    return builder.build(f"turret_{index}", anchor=(0.0, base_y, z))


def build_funnel(
    index: int,
    position: float,
    dimensions: Dimensions,
    hints: GeometryHints,
    config: ComponentPlacementConfig,
) -> ObjGeometry:
    base_y = _base_height(position, dimensions, hints, config)
    z = position * dimensions.length
    builder = MeshBuilder()
    builder.add_cylinder(
        (0.0, base_y, z),
        UP,
        dimensions.beam * config.funnel.radius,
        dimensions.draft * config.funnel.height,
        config.funnel.sides,
    )
    return builder.build(f"funnel_{index}", anchor=(0.0, base_y, z))


def place_components(
    dimensions: Dimensions,
    top: ProfileData,
    hints: GeometryHints,
    config: ComponentPlacementConfig | None = None,
) -> PlacedComponents:
    """Generate turret, superstructure and funnel geometry groups.

    Args:
        dimensions: Hull dimensions in meters.
        top: Beam profile used to size turrets from the local hull width.
        hints: Validated feature positions.
        config: Sizing fractions.

    Returns:
        PlacedComponents with deterministically named groups.
    """
    config = config or ComponentPlacementConfig()
    placed = PlacedComponents()

    placed.superstructure = build_superstructure(dimensions, hints, config)

    if not hints.turret_positions:
        message = "No turret positions supplied; mesh will carry no turrets"
        warn_degenerate(message, logger)
        placed.issues.append(message)
    for i, position in enumerate(hints.turret_positions):
        placed.turrets.append(build_turret(i, position, dimensions, top, hints, config))

    for i, position in enumerate(hints.funnel_positions):
        placed.funnels.append(build_funnel(i, position, dimensions, hints, config))

    logger.info(
        f"Placed {len(placed.turrets)} turrets, {len(placed.funnels)} funnels, "
        f"superstructure={'yes' if placed.superstructure else 'no'}"
    )
    return placed
