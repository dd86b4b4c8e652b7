"""NavalForge core: pipeline runner, base step, shared contracts."""

from .step_base import BaseStep
from .contracts import (
    Dimensions,
    GeometryHints,
    MeshStats,
    ObjGeometry,
    PipelineConfig,
    PixelBuffer,
    ProfileData,
    StepEntry,
    StepMeta,
    SuperstructureSpan,
)
from .errors import DegenerateInputWarning, GeometryError, NavalForgeError, ValidationError
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "Dimensions",
    "GeometryHints",
    "MeshStats",
    "ObjGeometry",
    "PipelineConfig",
    "PixelBuffer",
    "ProfileData",
    "StepEntry",
    "StepMeta",
    "SuperstructureSpan",
    "DegenerateInputWarning",
    "GeometryError",
    "NavalForgeError",
    "ValidationError",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
