"""Closed primitive builders (box, cylinder) with outward-facing winding."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from navalforge.core.contracts import ObjGeometry
from navalforge.utils.geometry import ring_points

# Corner index = i + 2*j + 4*k for (x, y, z) bits (i, j, k)
_BOX_FACES = (
    (0, 4, 6, 2),  # -X
    (1, 3, 7, 5),  # +X
    (0, 1, 5, 4),  # -Y
    (2, 6, 7, 3),  # +Y
    (0, 2, 3, 1),  # -Z
    (4, 5, 7, 6),  # +Z
)


def _frame(axis: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Unit vectors (u, v) with (u, v, axis) right-handed."""
    ref = np.array([0.0, 0.0, 1.0]) if abs(axis[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
    u = np.cross(axis, ref)
    u /= np.linalg.norm(u)
    return u, np.cross(axis, u)


class MeshBuilder:
    """Accumulates primitives into one geometry group."""

    def __init__(self) -> None:
        self._chunks: list[np.ndarray] = []
        self._faces: list[tuple[int, ...]] = []
        self._count = 0

    def _add(self, points: np.ndarray) -> int:
        offset = self._count
        self._chunks.append(np.asarray(points, dtype=np.float64).reshape(-1, 3))
        self._count += len(self._chunks[-1])
        return offset

    def add_box(self, lo: Sequence[float], hi: Sequence[float]) -> None:
        corners = np.array(
            [[(lo, hi)[i][0], (lo, hi)[j][1], (lo, hi)[k][2]] for k in (0, 1) for j in (0, 1) for i in (0, 1)]
        )
        o = self._add(corners)
        self._faces.extend(tuple(o + c for c in face) for face in _BOX_FACES)

    def add_cylinder(
        self,
        base_center: Sequence[float],
        axis: Sequence[float],
        radius: float,
        length: float,
        sides: int,
    ) -> None:
        """Closed cylinder from base_center along the (normalized) axis."""
        a = np.asarray(axis, dtype=np.float64)
        a = a / np.linalg.norm(a)
        u, v = _frame(a)
        base = np.asarray(base_center, dtype=np.float64)
        top = base + a * length

        o = self._add(np.vstack([
            ring_points(base, u, v, radius, sides),
            ring_points(top, u, v, radius, sides),
            base[None, :],
            top[None, :],
        ]))
        bottom_center, top_center = o + 2 * sides, o + 2 * sides + 1
        for k in range(sides):
            n = (k + 1) % sides
            b0, b1, t0, t1 = o + k, o + n, o + sides + k, o + sides + n
            self._faces.append((b0, b1, t1, t0))
            self._faces.append((bottom_center, b1, b0))
            self._faces.append((top_center, t0, t1))

    def build(self, group: str, anchor: Sequence[float] | None = None) -> ObjGeometry:
        vertices = np.concatenate(self._chunks, axis=0) if self._chunks else np.zeros((0, 3))
        return ObjGeometry(
            group=group,
            vertices=vertices,
            faces=tuple(self._faces),
            anchor=tuple(anchor) if anchor is not None else None,
        )
