"""Tests for core pipeline runner and pipeline contracts."""

from pathlib import Path

import pytest
import yaml

from navalforge.core.contracts import PipelineConfig, StepEntry, StepMeta
from navalforge.core.pipeline_runner import (
    check_dependencies,
    import_step_class,
    load_pipeline_config,
    load_step_config,
    run_pipeline,
)

STEP_MODULES = [
    "navalforge.steps.s01_profile_extraction",
    "navalforge.steps.s02_hull_loft",
    "navalforge.steps.s03_component_placement",
    "navalforge.steps.s04_mesh_export",
]


class TestContracts:
    def test_step_meta(self):
        meta = StepMeta(step_name="test", elapsed_seconds=1.5, params={"a": 1})
        assert meta.step_name == "test"
        assert meta.elapsed_seconds == 1.5

    def test_pipeline_config(self):
        cfg = PipelineConfig(
            project_name="test",
            data_root=Path("./data"),
            steps=[StepEntry(name="s1", module="navalforge.steps.s02_hull_loft", config_file="c.yaml")],
        )
        assert len(cfg.steps) == 1
        assert cfg.steps[0].enabled is True
        assert cfg.steps[0].depends_on == []


class TestPipelineRunner:
    def test_load_pipeline_config(self, tmp_path: Path):
        config = {
            "project_name": "test_project",
            "data_root": str(tmp_path / "data"),
            "steps": [
                {"name": "hull_loft", "module": "navalforge.steps.s02_hull_loft",
                 "config_file": "configs/steps/s02_hull_loft.yaml", "depends_on": [], "enabled": True},
            ],
        }
        config_file = tmp_path / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config, f)

        cfg = load_pipeline_config(config_file)
        assert cfg.project_name == "test_project"
        assert len(cfg.steps) == 1

    def test_import_step_class(self):
        cls = import_step_class("navalforge.steps.s02_hull_loft")
        assert cls.__name__ == "HullLoftStep"
        assert hasattr(cls, "input_type")
        assert hasattr(cls, "output_type")

    def test_import_all_steps(self):
        names = set()
        for module in STEP_MODULES:
            cls = import_step_class(module)
            assert cls.name, f"{module} has empty name"
            schema = cls.get_input_schema()
            assert "properties" in schema
            names.add(cls.name)
        assert names == {"profile_extraction", "hull_loft", "component_placement", "mesh_export"}

    def test_import_missing_step(self):
        with pytest.raises(ImportError):
            import_step_class("navalforge.core")

    def test_load_step_config(self, tmp_path: Path):
        from navalforge.steps.s02_hull_loft.config import HullLoftConfig

        config_file = tmp_path / "s02.yaml"
        with open(config_file, "w") as f:
            yaml.dump({"length_segments": 12, "radial_segments": 16}, f)

        cfg = load_step_config(config_file, HullLoftConfig)
        assert cfg.length_segments == 12
        assert cfg.radial_segments == 16
        assert cfg.hull_shape == "ellipse"

    def test_load_step_config_missing_file_uses_defaults(self, tmp_path: Path):
        from navalforge.steps.s02_hull_loft.config import HullLoftConfig

        cfg = load_step_config(tmp_path / "nope.yaml", HullLoftConfig)
        assert cfg.length_segments == 24
        assert cfg.radial_segments == 8

    def test_repo_pipeline_yaml(self):
        config_path = Path(__file__).resolve().parents[2] / "configs" / "pipeline.yaml"
        cfg = load_pipeline_config(config_path)
        assert [s.name for s in cfg.steps] == [
            "profile_extraction", "hull_loft", "component_placement", "mesh_export",
        ]
        for entry in cfg.steps:
            import_step_class(entry.module)
        assert [s.name for s in check_dependencies(cfg)] == [s.name for s in cfg.steps]

    def test_dependency_on_later_step_rejected(self):
        cfg = PipelineConfig(steps=[
            StepEntry(name="mesh_export", module="m", config_file="c.yaml", depends_on=["hull_loft"]),
            StepEntry(name="hull_loft", module="m", config_file="c.yaml"),
        ])
        with pytest.raises(ValueError, match="not listed before it"):
            check_dependencies(cfg)

    def test_disabled_steps_filtered(self):
        cfg = PipelineConfig(steps=[
            StepEntry(name="profile_extraction", module="m", config_file="c.yaml", enabled=False),
            StepEntry(name="hull_loft", module="m", config_file="c.yaml", depends_on=["profile_extraction"]),
        ])
        assert [s.name for s in check_dependencies(cfg)] == ["hull_loft"]

    def test_run_pipeline_without_images(self, tmp_path: Path, ship_json: Path):
        """Hull and components only: the loft falls back to the parametric taper."""
        cfg_dir = tmp_path / "cfg"
        cfg_dir.mkdir()
        config = {
            "project_name": "no_images",
            "data_root": str(tmp_path / "data"),
            "steps": [
                {"name": "hull_loft", "module": "navalforge.steps.s02_hull_loft",
                 "config_file": str(cfg_dir / "s02.yaml")},
                {"name": "component_placement", "module": "navalforge.steps.s03_component_placement",
                 "config_file": str(cfg_dir / "s03.yaml")},
                {"name": "mesh_export", "module": "navalforge.steps.s04_mesh_export",
                 "config_file": str(cfg_dir / "s04.yaml"),
                 "depends_on": ["hull_loft", "component_placement"]},
            ],
        }
        config_file = cfg_dir / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config, f)

        results = run_pipeline(config_file, {"ship_file": str(ship_json)})

        assert set(results) == {"hull_loft", "component_placement", "mesh_export"}
        export = results["mesh_export"]
        assert export.obj_path is not None and export.obj_path.exists()
        assert export.num_groups == 1 + len(results["component_placement"].groups)
        assert export.num_vertices > results["hull_loft"].num_vertices

        meta_file = tmp_path / "data" / "interim" / "hull_loft" / "step_meta.json"
        meta = StepMeta.model_validate_json(meta_file.read_text())
        assert meta.step_name == "hull_loft"
        assert meta.params["length_segments"] == 24
        assert meta.elapsed_seconds >= 0.0


class TestLogging:
    def test_setup_logging_with_file(self, tmp_path: Path):
        import logging

        from navalforge.core.logging import setup_logging

        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        log_file = tmp_path / "logs" / "run.log"
        try:
            setup_logging("debug", log_file=log_file)
            logging.getLogger("navalforge.test").info("hull lofted")
            for handler in root.handlers:
                handler.flush()
            assert "| INFO     | navalforge.test | hull lofted" in log_file.read_text()
            assert logging.getLogger("trimesh").level == logging.INFO
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

    def test_setup_logging_rejects_unknown_level(self):
        from navalforge.core.logging import setup_logging

        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("LOUD")
