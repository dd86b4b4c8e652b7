"""Fixtures for E2E pipeline tests."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
import yaml

from navalforge.core.contracts import PixelBuffer

STEPS = [
    ("profile_extraction", "s01_profile_extraction", []),
    ("hull_loft", "s02_hull_loft", ["profile_extraction"]),
    ("component_placement", "s03_component_placement", ["profile_extraction"]),
    ("mesh_export", "s04_mesh_export", ["hull_loft", "component_placement"]),
]


def create_blueprint(output_dir: Path, width: int = 240, height: int = 160) -> Path:
    """
    Create a synthetic two-view blueprint PNG.

    The upper band holds a side elevation (flat deck, rounded keel line),
    the lower band a plan view with a pointed bow and stern and two dark
    turret discs on the centerline.

    Args:
        output_dir: Directory to save the image
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Path to the created PNG file
    """
    import cv2

    output_dir.mkdir(parents=True, exist_ok=True)
    canvas = np.full((height, width, 3), 255, dtype=np.uint8)

    # Side view: hull between rows 20 and 50
    x0, x1 = 20, width - 20
    for x in range(x0, x1):
        t = (x - x0) / (x1 - x0 - 1)
        depth = int(round(30 * (1.0 - abs(2.0 * t - 1.0) ** 4)))
        canvas[20 : 20 + max(depth, 1), x] = (60, 60, 60)

    # Plan view: outlined hull centred on row 110 with turret discs
    cy = 110
    pts = []
    for x in range(x0, x1):
        t = (x - x0) / (x1 - x0 - 1)
        pts.append((x, cy - int(round(25 * (1.0 - abs(2.0 * t - 1.0) ** 2.5)))))
    outline = np.array(pts + [(x, 2 * cy - y) for x, y in reversed(pts)], dtype=np.int32)
    cv2.polylines(canvas, [outline], isClosed=True, color=(0, 0, 0), thickness=2)
    for fx in (0.25, 0.75):
        cv2.circle(canvas, (int(x0 + fx * (x1 - x0)), cy), 8, (0, 0, 0), thickness=-1)

    path = output_dir / "blueprint.png"
    cv2.imwrite(str(path), canvas)
    return path


@pytest.fixture
def synthetic_blueprint(tmp_path: Path) -> Path:
    """Pytest fixture that provides a synthetic two-view blueprint."""
    pytest.importorskip("cv2")
    return create_blueprint(tmp_path / "raw")


@pytest.fixture
def pipeline_config(tmp_path: Path) -> Path:
    """Write a pipeline.yaml (and empty step configs) running all four steps."""
    cfg_dir = tmp_path / "configs"
    (cfg_dir / "steps").mkdir(parents=True, exist_ok=True)
    steps = []
    for name, module, deps in STEPS:
        config_file = cfg_dir / "steps" / f"{module}.yaml"
        config_file.write_text("{}\n")
        steps.append({
            "name": name,
            "module": f"navalforge.steps.{module}",
            "config_file": str(config_file),
            "depends_on": deps,
        })
    config = {"project_name": "e2e", "data_root": str(tmp_path / "data"), "steps": steps}
    path = cfg_dir / "pipeline.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)
    return path


@pytest.fixture
def ship_file(tmp_path: Path) -> Path:
    path = tmp_path / "raw" / "ship.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({
        "realDimensions": {"length": 200.0, "beam": 30.0, "draft": 10.0},
        "geometry": {"superstructure": {"start": 0.4, "end": 0.6}},
    }))
    return path


@pytest.fixture
def view_pair() -> tuple[PixelBuffer, PixelBuffer]:
    """(top, side) in-memory views of a simple hull."""
    top = np.full((60, 200, 4), 255, dtype=np.uint8)
    side = np.full((40, 200, 4), 255, dtype=np.uint8)
    for x in range(10, 190):
        t = (x - 10) / 179
        half = int(round(20 * (1.0 - abs(2.0 * t - 1.0) ** 2.5)))
        top[30 - half : 30 + half + 1, x, :3] = 0
    side[10:30, 10:190, :3] = 0
    return PixelBuffer(top), PixelBuffer(side)
