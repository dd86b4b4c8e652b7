"""Cross-sectional hull lofting.

Rings are generated at evenly spaced stations from bow (z = 0) to stern
(z = length). Each ring spans the angle range [-pi, pi] with its first
and last vertex at the same position, so the seam stays addressable.
The keel sits at y = 0 and a full-draft section reaches the deck at
y = draft.

Adjacent rings are stitched with quads; a collapsed (point) station is
bridged with a triangle fan; full end rings are closed with a fan
anchored on ring vertex 0. After welding coincident positions every edge
is shared by exactly two faces.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from navalforge.core.contracts import Dimensions, ObjGeometry, ProfileBounds, ProfileData
from navalforge.core.errors import GeometryError, ValidationError, warn_degenerate
from .config import HullLoftConfig

logger = logging.getLogger(__name__)

SectionFn = Callable[[np.ndarray, float, float], tuple[np.ndarray, np.ndarray]]


def ellipse_section(theta: np.ndarray, half_beam: float, half_draft: float) -> tuple[np.ndarray, np.ndarray]:
    """(x, y) offsets of an ellipse from the section center."""
    return half_beam * np.cos(theta), half_draft * np.sin(theta)


SECTION_SHAPES: dict[str, SectionFn] = {
    "ellipse": ellipse_section,
}


def parametric_profile(resolution: int = 100, exponent: float = 2.5) -> ProfileData:
    """Symmetric taper ``1 - |2t - 1|^exponent`` used when a view is unavailable."""
    t = np.linspace(0.0, 1.0, resolution) if resolution > 1 else np.array([0.5])
    curve = np.clip(1.0 - np.abs(2.0 * t - 1.0) ** exponent, 0.0, 1.0)
    nonzero = np.flatnonzero(curve)
    if nonzero.size == 0:
        return ProfileData(curve=curve)
    peak = int(np.argmax(curve))
    return ProfileData(
        curve=curve,
        bounds=ProfileBounds(int(nonzero[0]), int(nonzero[-1]), peak, float(curve[peak])),
    )


def _stitch(a: list[int], b: list[int], faces: list[tuple[int, ...]]) -> None:
    if len(a) == 1 and len(b) == 1:
        return
    if len(a) == 1:
        p = a[0]
        faces.extend((p, b[j + 1], b[j]) for j in range(len(b) - 1))
        return
    if len(b) == 1:
        p = b[0]
        faces.extend((a[j], a[j + 1], p) for j in range(len(a) - 1))
        return
    faces.extend((a[j], a[j + 1], b[j + 1], b[j]) for j in range(len(a) - 1))


def _cap(ring: list[int], faces: list[tuple[int, ...]], facing_bow: bool) -> None:
    """Triangle fan over the distinct ring positions (the last index repeats the first)."""
    if len(ring) == 1:
        return
    apex = ring[0]
    for j in range(1, len(ring) - 2):
        if facing_bow:
            faces.append((apex, ring[j + 1], ring[j]))
        else:
            faces.append((apex, ring[j], ring[j + 1]))


def loft_hull(
    top: ProfileData,
    side: ProfileData,
    dimensions: Dimensions,
    config: HullLoftConfig | None = None,
    sheer: ProfileData | None = None,
) -> ObjGeometry:
    """Loft a closed hull from beam (top) and draft (side) profiles.

    Args:
        top: Normalized beam distribution along the length.
        side: Normalized draft distribution along the length.
        dimensions: Real-world length/beam/draft in meters.
        config: Segment counts, section shape and degeneracy tolerance.
        sheer: Optional deck sheer curve, scaled by ``config.sheer_height``.

    Returns:
        ObjGeometry named 'hull'.
    """
    config = config or HullLoftConfig()
    shape = SECTION_SHAPES.get(config.hull_shape)
    if shape is None:
        raise ValidationError(f"Unknown hull shape '{config.hull_shape}', expected one of {list(SECTION_SHAPES)}")
    dims = np.array([dimensions.length, dimensions.beam, dimensions.draft])
    if not np.all(np.isfinite(dims)):
        raise GeometryError(f"Non-finite hull dimensions {dims.tolist()}")

    n_len = config.length_segments
    theta = np.linspace(-np.pi, np.pi, config.radial_segments + 1)
    center_y = dimensions.draft / 2.0

    chunks: list[np.ndarray] = []
    rings: list[list[int]] = []
    count = 0
    collapsed = 0

    for i in range(n_len + 1):
        t = i / n_len
        z = t * dimensions.length
        half_beam = top.sample(t) * dimensions.beam / 2.0
        half_draft = side.sample(t) * dimensions.draft / 2.0

        if half_beam < config.min_section_radius or half_draft < config.min_section_radius:
            chunks.append(np.array([[0.0, center_y, z]]))
            rings.append([count])
            count += 1
            collapsed += 1
            continue

        xs, ys = shape(theta, half_beam, half_draft)
        ys = center_y + ys
        if sheer is not None and config.sheer_height > 0:
            ys = ys + sheer.sample(t) * config.sheer_height * np.clip(np.sin(theta), 0.0, None)

        ring = np.column_stack([xs, ys, np.full_like(xs, z)])
        if not np.all(np.isfinite(ring)):
            raise GeometryError(f"Non-finite vertices in hull section {i} (t={t:.3f})")
        chunks.append(ring)
        rings.append(list(range(count, count + len(ring))))
        count += len(ring)

    faces: list[tuple[int, ...]] = []
    _cap(rings[0], faces, facing_bow=True)
    for a, b in zip(rings, rings[1:]):
        _stitch(a, b, faces)
    _cap(rings[-1], faces, facing_bow=False)

    if collapsed:
        logger.debug(f"Collapsed {collapsed}/{n_len + 1} degenerate sections to points")
    if not faces:
        warn_degenerate("Hull profiles are empty; hull has no faces", logger)

    vertices = np.concatenate(chunks, axis=0)
    logger.info(
        f"Lofted hull: {n_len + 1} sections x {config.radial_segments + 1} ring vertices, "
        f"{len(vertices)} vertices, {len(faces)} faces"
    )
    return ObjGeometry(group="hull", vertices=vertices, faces=tuple(faces))
