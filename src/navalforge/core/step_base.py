"""Base class for all pipeline steps.

A step is a thin file boundary around the pure geometry functions in its
private modules: it reads artifacts from ``data_root``, calls them, and
writes new artifacts plus a ``step_meta.json`` recording the config and
timing of the run. Input, Output and Config are Pydantic models so the
runner can check how steps connect.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

from .contracts import StepMeta

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)

META_FILENAME = "step_meta.json"


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses set ``name`` and the three model types, and implement
    ``validate_inputs()`` (existence checks, no heavy work) and ``run()``.

    Example:
        class HullLoftStep(BaseStep[HullLoftInput, HullLoftOutput, HullLoftConfig]):
            name = "hull_loft"
            input_type = HullLoftInput
            output_type = HullLoftOutput
            config_type = HullLoftConfig
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @property
    def step_name(self) -> str:
        return self.name or self.__class__.__name__

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Validate, run, and record a StepMeta next to the step's artifacts."""
        logger.info(f"[{self.step_name}] Validating inputs...")
        if not self.validate_inputs(inputs):
            raise ValueError(f"[{self.step_name}] Input validation failed")

        logger.info(f"[{self.step_name}] Starting...")
        t0 = time.perf_counter()
        result = self.run(inputs)
        meta = StepMeta(
            step_name=self.step_name,
            elapsed_seconds=time.perf_counter() - t0,
            params=self.config.model_dump(mode="json"),
        )
        (self.output_dir / META_FILENAME).write_text(meta.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"[{self.step_name}] Done in {meta.elapsed_seconds:.2f}s")
        return result

    @property
    def output_dir(self) -> Path:
        """Per-step artifact directory, ``data_root/interim/<step name>``."""
        path = self.data_root / "interim" / self.step_name
        path.mkdir(parents=True, exist_ok=True)
        return path

    @classmethod
    def get_input_schema(cls) -> dict:
        return cls.input_type.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> dict:
        return cls.output_type.model_json_schema()

    @classmethod
    def get_config_schema(cls) -> dict:
        return cls.config_type.model_json_schema()
