"""Minimal OBJ reader for the productions written by ``export_obj``.

Handles ``v``, ``f`` (with optional ``/vt/vn`` suffixes and negative
relative indices), ``o`` and ``g``. Other directives are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from navalforge.core.errors import ValidationError


@dataclass
class ParsedObj:
    vertices: np.ndarray
    faces: list[tuple[int, ...]] = field(default_factory=list)  # 0-based
    groups: list[str] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return int(len(self.vertices))

    @property
    def face_count(self) -> int:
        return len(self.faces)


def _face_index(token: str, n_vertices: int, line_no: int) -> int:
    raw = int(token.split("/")[0])
    index = raw - 1 if raw > 0 else n_vertices + raw
    if raw == 0 or not 0 <= index < n_vertices:
        raise ValidationError(f"line {line_no}: face index {raw} out of range (n={n_vertices})")
    return index


def parse_obj(text: str) -> ParsedObj:
    vertices: list[list[float]] = []
    faces: list[tuple[int, ...]] = []
    groups: list[str] = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if not parts or parts[0].startswith("#"):
            continue
        tag = parts[0]
        try:
            if tag == "v":
                vertices.append([float(c) for c in parts[1:4]])
                if len(vertices[-1]) != 3:
                    raise ValidationError(f"line {line_no}: vertex needs 3 coordinates")
            elif tag == "f":
                if len(parts) < 4:
                    raise ValidationError(f"line {line_no}: face needs at least 3 indices")
                faces.append(tuple(_face_index(t, len(vertices), line_no) for t in parts[1:]))
            elif tag in ("o", "g"):
                name = " ".join(parts[1:])
                if name and (not groups or groups[-1] != name):
                    groups.append(name)
        except ValidationError:
            raise
        except ValueError as e:
            raise ValidationError(f"line {line_no}: cannot parse {line!r}") from e

    return ParsedObj(
        vertices=np.array(vertices, dtype=np.float64).reshape(-1, 3),
        faces=faces,
        groups=groups,
    )
