"""Export geometry groups to GLB (glTF Binary) format.

Uses trimesh to build a Scene with one node per group. Quads are split
into triangles; the mesh is already Y-up so no axis swap is needed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from navalforge.core.contracts import ObjGeometry

logger = logging.getLogger(__name__)


def _has_trimesh() -> bool:
    """Check if trimesh is available."""
    try:
        import trimesh  # noqa: F401
        return True
    except ImportError:
        return False


def triangulate(faces: Sequence[tuple[int, ...]]) -> np.ndarray:
    """Split quads (a, b, c, d) into (a, b, c) and (a, c, d)."""
    tris = []
    for f in faces:
        if len(f) == 4:
            tris.append((f[0], f[1], f[2]))
            tris.append((f[0], f[2], f[3]))
        else:
            tris.append(tuple(f))
    return np.array(tris, dtype=np.int64).reshape(-1, 3)


def write_glb(
    geometries: Sequence[ObjGeometry],
    output_path: Path,
    color_map: dict[str, list[float]] | None = None,
) -> Path:
    """Write geometry groups to a GLB file.

    Args:
        geometries: Groups to export; empty groups are skipped.
        output_path: Output .glb file path.
        color_map: RGBA (0-1) per group name, ``"default"`` as fallback.

    Returns:
        Path to the written GLB file.
    """
    import trimesh

    color_map = color_map or {}
    scene = trimesh.Scene()

    for geometry in geometries:
        faces = triangulate(geometry.faces)
        if len(faces) == 0:
            logger.debug(f"Skipping empty group {geometry.group}")
            continue

        rgba = np.array(color_map.get(geometry.group, color_map.get("default", [0.8, 0.8, 0.8, 1.0])))
        if len(rgba) < 4:
            rgba = np.append(rgba, 1.0)
        rgba_255 = (np.clip(rgba, 0, 1) * 255).astype(np.uint8)

        mesh = trimesh.Trimesh(
            vertices=np.asarray(geometry.vertices),
            faces=faces,
            face_colors=np.tile(rgba_255, (len(faces), 1)),
            process=False,
        )
        scene.add_geometry(mesh, node_name=geometry.group)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    scene.export(str(output_path), file_type="glb")

    size_mb = output_path.stat().st_size / (1024 * 1024)
    logger.info(f"GLB exported: {output_path} ({size_mb:.2f} MB, {len(geometries)} groups)")
    return output_path
