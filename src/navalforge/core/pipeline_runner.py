"""Pipeline orchestrator: reads pipeline.yaml and executes steps in order."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel

from .contracts import PipelineConfig, StepEntry

logger = logging.getLogger(__name__)


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load and validate pipeline.yaml."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return PipelineConfig(**raw)


def load_step_config(config_path: Path, config_class: type[BaseModel]) -> BaseModel:
    """Load a step-specific YAML config into its Pydantic model.

    A missing file yields the model defaults.
    """
    if not Path(config_path).exists():
        logger.warning(f"Step config {config_path} not found, using defaults")
        return config_class()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class(**raw)


def import_step_class(module_path: str):
    """Dynamically import a step class from its module path.

    Expects module_path like 'navalforge.steps.s02_hull_loft'
    and looks for a class ending in 'Step' in that module's step.py.
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if (
            isinstance(attr, type)
            and hasattr(attr, "run")
            and attr_name.endswith("Step")
            and attr_name != "BaseStep"
        ):
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def check_dependencies(pipeline_cfg: PipelineConfig) -> list[StepEntry]:
    """Return the enabled steps, rejecting dependencies that cannot be satisfied.

    A dependency must name a step listed earlier. Depending on a disabled
    step is allowed (its outputs are simply absent) but logged.
    """
    seen: dict[str, StepEntry] = {}
    for entry in pipeline_cfg.steps:
        for dep in entry.depends_on:
            if dep not in seen:
                raise ValueError(f"Step '{entry.name}' depends on '{dep}', which is not listed before it")
            if entry.enabled and not seen[dep].enabled:
                logger.warning(f"Step '{entry.name}' depends on disabled step '{dep}'")
        if entry.name in seen:
            raise ValueError(f"Duplicate step name '{entry.name}'")
        seen[entry.name] = entry
    return [s for s in pipeline_cfg.steps if s.enabled]


def run_pipeline(config_path: Path, initial_input: dict | None = None) -> dict[str, BaseModel]:
    """Execute the full pipeline from a config file.

    Each step's input is built from ``initial_input`` (ship file, image
    paths) overlaid with the non-empty outputs of the steps it depends on;
    fields the input model does not declare are dropped.
    """
    pipeline_cfg = load_pipeline_config(config_path)
    data_root = pipeline_cfg.data_root
    results: dict[str, BaseModel] = {}

    enabled_steps = check_dependencies(pipeline_cfg)
    logger.info(f"Pipeline '{pipeline_cfg.project_name}' with {len(enabled_steps)} steps")

    for entry in enabled_steps:
        logger.info(f"--- Step: {entry.name} ---")

        step_cls = import_step_class(entry.module)
        step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
        step_instance = step_cls(config=step_config, data_root=data_root)

        input_data = dict(initial_input or {})
        for dep in entry.depends_on:
            if dep in results:
                input_data.update(results[dep].model_dump(exclude_none=True))

        known = step_cls.input_type.model_fields
        step_input = step_cls.input_type(**{k: v for k, v in input_data.items() if k in known})
        results[entry.name] = step_instance.execute(step_input)

    logger.info("Pipeline complete.")
    return results
