"""Mesh geometry utilities: rounding, bounding boxes, edge topology."""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> int:
    """Deterministic rounding (Python's round() is banker's rounding)."""
    return int(math.floor(x + 0.5))


def bounding_box(vertices: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Axis-aligned (min, max) corners of an (N, 3) array; zeros when empty."""
    verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    if len(verts) == 0:
        return np.zeros(3), np.zeros(3)
    return verts.min(axis=0), verts.max(axis=0)


def weld_indices(vertices: np.ndarray, decimals: int = 6) -> np.ndarray:
    """Map each vertex to the index of its first positional duplicate."""
    keys = np.round(np.asarray(vertices, dtype=np.float64).reshape(-1, 3), decimals) + 0.0
    _, first, inverse = np.unique(keys, axis=0, return_index=True, return_inverse=True)
    return first[np.asarray(inverse).reshape(-1)]


def edge_usage(
    vertices: np.ndarray,
    faces: Iterable[tuple[int, ...]],
    decimals: int = 6,
) -> Counter:
    """Count how many faces use each undirected edge, after welding by position.

    Edges that collapse to a single welded vertex are ignored.
    """
    welded = weld_indices(vertices, decimals)
    usage: Counter = Counter()
    for face in faces:
        ids = [int(welded[i]) for i in face]
        for a, b in zip(ids, ids[1:] + ids[:1]):
            if a != b:
                usage[(min(a, b), max(a, b))] += 1
    return usage


def is_watertight(vertices: np.ndarray, faces: Iterable[tuple[int, ...]], decimals: int = 6) -> bool:
    """True when every welded edge is shared by exactly two faces."""
    usage = edge_usage(vertices, faces, decimals)
    bad = [edge for edge, n in usage.items() if n != 2]
    if bad:
        logger.debug(f"{len(bad)} non-manifold/boundary edges, e.g. {bad[:3]}")
    return bool(usage) and not bad


def ring_points(
    center: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    radius: float,
    sides: int,
) -> np.ndarray:
    """``sides`` points on a circle spanned by unit vectors u, v around center."""
    angles = 2.0 * np.pi * np.arange(sides) / sides
    return (
        np.asarray(center, dtype=np.float64)[None, :]
        + radius * np.cos(angles)[:, None] * np.asarray(u)[None, :]
        + radius * np.sin(angles)[:, None] * np.asarray(v)[None, :]
    )
