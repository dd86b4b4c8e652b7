"""Common models shared across pipeline steps.

Pydantic models describe everything that crosses a step boundary as JSON
(configs, dimensions, hints, stats). Array-carrying value objects
(pixel buffers, profiles, geometry groups) are frozen dataclasses over
read-only numpy arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ValidationError


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "navalforge_project"
    data_root: Path = Path("./data")
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()


# ── Ship description ─────────────────────────────────────────────────


class Dimensions(BaseModel):
    """Real-world hull dimensions in meters."""

    length: float = Field(..., gt=0, description="Overall length (Z extent)")
    beam: float = Field(..., gt=0, description="Maximum width (X extent)")
    draft: float = Field(..., gt=0, description="Hull depth (Y extent)")

    def scaled(self, factor: float) -> Dimensions:
        return Dimensions(
            length=self.length * factor, beam=self.beam * factor, draft=self.draft * factor
        )


class SuperstructureSpan(BaseModel):
    """Normalized [start, end] extent of the superstructure along the length."""

    start: float = Field(0.3, ge=0.0, le=1.0)
    end: float = Field(0.6, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_order(self) -> SuperstructureSpan:
        if self.start >= self.end:
            raise ValueError(f"superstructure start ({self.start}) must be < end ({self.end})")
        return self

    def contains(self, position: float) -> bool:
        return self.start <= position <= self.end


def _check_positions(values: list[float]) -> list[float]:
    for v in values:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"position {v} outside [0, 1]")
    return sorted(values)


class GeometryHints(BaseModel):
    """Normalized feature positions (0.0 = bow, 1.0 = stern)."""

    model_config = ConfigDict(populate_by_name=True)

    turret_positions: list[float] = Field(default_factory=list, alias="turretPositions")
    superstructure: SuperstructureSpan | None = Field(default_factory=SuperstructureSpan)
    funnel_positions: list[float] = Field(default_factory=list, alias="funnelPositions")

    @field_validator("turret_positions", "funnel_positions")
    @classmethod
    def _positions_in_range(cls, v: list[float]) -> list[float]:
        return _check_positions(v)


# ── Raster input ─────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA raster, shape (height, width, 4), dtype uint8."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValidationError(f"PixelBuffer expects (H, W, 4) RGBA, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValidationError(f"PixelBuffer is empty: {arr.shape}")
        if arr.dtype != np.uint8:
            raise ValidationError(f"PixelBuffer expects uint8 samples, got {arr.dtype}")
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def rgb(self) -> np.ndarray:
        """Fresh float64 (H, W, 3) copy of the color channels."""
        return self.pixels[:, :, :3].astype(np.float64)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> PixelBuffer:
        expected = width * height * 4
        if len(data) != expected:
            raise ValidationError(
                f"RGBA buffer of {width}x{height} needs {expected} bytes, got {len(data)}"
            )
        return cls(np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4))

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Wrap a grayscale, RGB or RGBA uint8 array (copied, alpha filled with 255)."""
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValidationError(f"Unsupported image shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
        return cls(np.ascontiguousarray(arr, dtype=np.uint8))


@dataclass(frozen=True)
class BackgroundEstimate:
    color: tuple[float, float, float]
    confidence: float
    method: str


@dataclass(frozen=True)
class ViewRegion:
    """Axis-aligned pixel rectangle, exclusive max bounds."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


# ── Profiles ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ProfileBounds:
    """First/last non-zero sample and peak of the raw (pixel) heights."""

    min_index: int = 0
    max_index: int = 0
    peak_index: int = 0
    peak_value: float = 0.0


def _readonly(values: Any, dtype: Any = np.float64) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class ProfileData:
    """Normalized 1-D extent curve sampled along the ship's length."""

    curve: np.ndarray
    bounds: ProfileBounds = ProfileBounds()

    def __post_init__(self) -> None:
        arr = _readonly(self.curve).reshape(-1)
        if arr.size == 0:
            raise ValidationError("Profile curve must contain at least one sample")
        if not np.all(np.isfinite(arr)):
            raise ValidationError("Profile curve contains non-finite values")
        if arr.min() < 0.0 or arr.max() > 1.0:
            raise ValidationError("Profile curve values must lie in [0, 1]")
        object.__setattr__(self, "curve", arr)

    @property
    def resolution(self) -> int:
        return int(self.curve.size)

    def index_at(self, t: float) -> int:
        if not 0.0 <= t <= 1.0:
            raise ValidationError(f"Profile position {t} outside [0, 1]")
        return int(np.floor(t * (self.resolution - 1) + 0.5))

    def sample(self, t: float) -> float:
        """Nearest-sample lookup at normalized position t."""
        return float(self.curve[self.index_at(t)])

    def with_curve(self, curve: np.ndarray) -> ProfileData:
        return ProfileData(curve=curve, bounds=self.bounds)

    def to_dict(self) -> dict:
        return {
            "curve": self.curve.tolist(),
            "resolution": self.resolution,
            "bounds": {
                "min_index": self.bounds.min_index,
                "max_index": self.bounds.max_index,
                "peak_index": self.bounds.peak_index,
                "peak_value": self.bounds.peak_value,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProfileData:
        return cls(curve=np.asarray(data["curve"]), bounds=ProfileBounds(**data.get("bounds", {})))

    @classmethod
    def flat(cls, resolution: int, value: float = 1.0) -> ProfileData:
        peak = resolution - 1 if value > 0 else 0
        return cls(
            curve=np.full(resolution, value),
            bounds=ProfileBounds(0, peak, 0, float(value)),
        )


# ── Geometry ─────────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class ObjGeometry:
    """Self-contained indexed geometry group (0-based face indices)."""

    group: str
    vertices: np.ndarray
    faces: tuple[tuple[int, ...], ...]
    anchor: tuple[float, float, float] | None = None

    def __post_init__(self) -> None:
        verts = _readonly(self.vertices).reshape(-1, 3)
        faces = tuple(tuple(int(i) for i in f) for f in self.faces)
        n = len(verts)
        for f in faces:
            if len(f) not in (3, 4):
                raise ValidationError(f"[{self.group}] face {f} must have 3 or 4 indices")
            if min(f) < 0 or max(f) >= n:
                raise ValidationError(f"[{self.group}] face {f} references missing vertex (n={n})")
        object.__setattr__(self, "vertices", verts)
        object.__setattr__(self, "faces", faces)
        if self.anchor is not None:
            object.__setattr__(self, "anchor", tuple(float(c) for c in self.anchor))

    @property
    def vertex_count(self) -> int:
        return int(len(self.vertices))

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def to_dict(self) -> dict:
        return {
            "group": self.group,
            "vertices": self.vertices.tolist(),
            "faces": [list(f) for f in self.faces],
            "anchor": list(self.anchor) if self.anchor is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ObjGeometry:
        anchor = data.get("anchor")
        return cls(
            group=data["group"],
            vertices=np.asarray(data["vertices"], dtype=np.float64).reshape(-1, 3),
            faces=tuple(tuple(f) for f in data["faces"]),
            anchor=tuple(anchor) if anchor is not None else None,
        )


class MeshStats(BaseModel):
    """Read-only summary of an assembled mesh."""

    vertex_count: int = 0
    face_count: int = 0
    groups: list[str] = Field(default_factory=list)
    bbox_min: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    bbox_max: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])

    @property
    def size(self) -> list[float]:
        return [hi - lo for lo, hi in zip(self.bbox_min, self.bbox_max)]
