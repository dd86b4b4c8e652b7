"""Serialize geometry groups to Wavefront OBJ text.

Groups are concatenated in call order. Each group's 0-based face indices
are shifted by the running vertex offset and written 1-based, so every
``f`` line references vertices across the whole file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np

from navalforge.core.contracts import MeshStats, ObjGeometry

logger = logging.getLogger(__name__)

HEADER = "NavalForge procedural ship mesh"


@dataclass(frozen=True)
class ObjExport:
    text: str
    stats: MeshStats


def mesh_stats(geometries: Sequence[ObjGeometry]) -> MeshStats:
    """Counts and bounding box over all groups."""
    groups = [g.group for g in geometries]
    face_count = sum(g.face_count for g in geometries)
    stacked = [g.vertices for g in geometries if g.vertex_count]
    if not stacked:
        return MeshStats(face_count=face_count, groups=groups)

    vertices = np.concatenate(stacked, axis=0)
    return MeshStats(
        vertex_count=int(len(vertices)),
        face_count=face_count,
        groups=groups,
        bbox_min=vertices.min(axis=0).tolist(),
        bbox_max=vertices.max(axis=0).tolist(),
    )


def _header(stats: MeshStats, metadata: Mapping[str, Any] | None) -> list[str]:
    lines = [
        f"# {HEADER}",
        f"# vertices: {stats.vertex_count}",
        f"# faces: {stats.face_count}",
        f"# groups: {len(stats.groups)}",
    ]
    for key, value in (metadata or {}).items():
        lines.append(f"# {key}: {value}")
    return lines


def export_obj(
    geometries: Sequence[ObjGeometry],
    metadata: Mapping[str, Any] | None = None,
) -> ObjExport:
    """Serialize geometry groups to OBJ text.

    Args:
        geometries: Groups in output order (hull first, then components).
        metadata: Extra ``key: value`` lines for the comment header.

    Returns:
        ObjExport with the file text and MeshStats of the whole mesh.
    """
    stats = mesh_stats(geometries)
    lines = _header(stats, metadata)

    offset = 1
    for geometry in geometries:
        lines.append(f"o {geometry.group}")
        lines.append(f"g {geometry.group}")
        for x, y, z in geometry.vertices:
            lines.append(f"v {x:.6f} {y:.6f} {z:.6f}")
        for face in geometry.faces:
            lines.append("f " + " ".join(str(i + offset) for i in face))
        offset += geometry.vertex_count

    logger.info(
        f"OBJ: {len(geometries)} groups, {stats.vertex_count} vertices, {stats.face_count} faces"
    )
    return ObjExport(text="\n".join(lines) + "\n", stats=stats)
