"""Tests for S02: Hull lofting."""

import json
from pathlib import Path

import numpy as np
import pydantic
import pytest

from navalforge.core.contracts import Dimensions, ProfileData
from navalforge.core.errors import DegenerateInputWarning, ValidationError
from navalforge.steps.s02_hull_loft._loft import loft_hull, parametric_profile
from navalforge.steps.s02_hull_loft.config import HullLoftConfig
from navalforge.steps.s02_hull_loft.contracts import HullLoftInput, HullLoftOutput
from navalforge.steps.s02_hull_loft.step import HullLoftStep
from navalforge.utils.geometry import bounding_box, is_watertight
from navalforge.utils.io import load_geometries, save_profile

FLAT = ProfileData.flat(100)


def _size(geometry) -> np.ndarray:
    lo, hi = bounding_box(geometry.vertices)
    return hi - lo


class TestHullLoftContracts:
    def test_config_defaults(self):
        cfg = HullLoftConfig()
        assert cfg.length_segments == 24
        assert cfg.radial_segments == 8
        assert cfg.hull_shape == "ellipse"
        assert cfg.sheer_height == 0.0

    def test_config_rejects_unknown_shape(self):
        with pytest.raises(pydantic.ValidationError):
            HullLoftConfig(hull_shape="box")

    def test_config_rejects_too_few_radial_segments(self):
        with pytest.raises(pydantic.ValidationError):
            HullLoftConfig(radial_segments=2)

    def test_input_requires_ship_file(self):
        with pytest.raises(pydantic.ValidationError):
            HullLoftInput()

    def test_output_schema(self):
        schema = HullLoftOutput.model_json_schema()
        assert "hull_file" in schema["properties"]
        assert "num_vertices" in schema["properties"]


class TestLoftHull:
    def test_flat_profile_scenario(self, dimensions):
        hull = loft_hull(FLAT, FLAT, dimensions, HullLoftConfig(length_segments=24, radial_segments=8))
        assert hull.group == "hull"
        assert hull.vertex_count == 25 * 9
        np.testing.assert_allclose(_size(hull), [30.0, 10.0, 200.0], rtol=0.01)

    def test_keel_and_deck(self, dimensions):
        hull = loft_hull(FLAT, FLAT, dimensions)
        lo, hi = bounding_box(hull.vertices)
        assert lo[1] == pytest.approx(0.0, abs=1e-9)
        assert hi[1] == pytest.approx(dimensions.draft)
        assert lo[2] == 0.0 and hi[2] == pytest.approx(dimensions.length)
        assert lo[0] == pytest.approx(-hi[0])

    @pytest.mark.parametrize("radial", [4, 8, 32])
    def test_bbox_within_one_percent(self, radial):
        dims = Dimensions(length=150, beam=20, draft=8)
        hull = loft_hull(FLAT, FLAT, dims, HullLoftConfig(radial_segments=radial))
        np.testing.assert_allclose(_size(hull), [20, 8, 150], rtol=0.01)

    def test_linearity(self, dimensions):
        top = parametric_profile(80)
        side = ProfileData(curve=np.linspace(0.2, 1.0, 50))
        small = loft_hull(top, side, dimensions)
        big = loft_hull(top, side, dimensions.scaled(2.0))
        np.testing.assert_allclose(_size(big), 2.0 * _size(small), rtol=1e-9)

    def test_watertight_flat(self, dimensions):
        hull = loft_hull(FLAT, FLAT, dimensions)
        assert is_watertight(hull.vertices, hull.faces)

    def test_watertight_with_pointed_ends(self, dimensions):
        # zero at bow and stern collapses the end rings to points
        top = parametric_profile(100)
        assert top.curve[0] == 0.0
        hull = loft_hull(top, top, dimensions)
        assert is_watertight(hull.vertices, hull.faces)

    def test_watertight_with_gap(self, dimensions):
        curve = np.ones(50)
        curve[20:25] = 0.0
        hull = loft_hull(ProfileData(curve=curve), FLAT, dimensions)
        assert is_watertight(hull.vertices, hull.faces)
        assert np.all(np.isfinite(hull.vertices))

    def test_faces_are_quads_and_triangles(self, dimensions):
        hull = loft_hull(parametric_profile(100), FLAT, dimensions)
        assert {len(f) for f in hull.faces} <= {3, 4}

    def test_empty_profiles_warn(self, dimensions):
        zero = ProfileData(curve=np.zeros(10))
        with pytest.warns(DegenerateInputWarning):
            hull = loft_hull(zero, zero, dimensions)
        assert hull.face_count == 0
        assert hull.vertex_count == 25

    def test_sheer_raises_deck(self, dimensions):
        cfg = HullLoftConfig(sheer_height=2.0)
        plain = loft_hull(FLAT, FLAT, dimensions, cfg)
        sheered = loft_hull(FLAT, FLAT, dimensions, cfg, sheer=FLAT)
        assert bounding_box(sheered.vertices)[1][1] == pytest.approx(dimensions.draft + 2.0)
        assert bounding_box(sheered.vertices)[0][1] == pytest.approx(bounding_box(plain.vertices)[0][1])

    def test_unknown_shape_rejected(self, dimensions):
        cfg = HullLoftConfig.model_construct(**{**HullLoftConfig().model_dump(), "hull_shape": "box"})
        with pytest.raises(ValidationError):
            loft_hull(FLAT, FLAT, dimensions, cfg)

    def test_deterministic(self, dimensions):
        a = loft_hull(parametric_profile(60), FLAT, dimensions)
        b = loft_hull(parametric_profile(60), FLAT, dimensions)
        assert a.vertices.tobytes() == b.vertices.tobytes()
        assert a.faces == b.faces


class TestParametricProfile:
    def test_shape(self):
        profile = parametric_profile(101, 2.5)
        assert profile.resolution == 101
        assert profile.curve[0] == 0.0
        assert profile.curve[-1] == 0.0
        assert profile.curve[50] == 1.0
        assert profile.bounds.peak_index == 50


class TestHullLoftStep:
    def test_validate_missing_ship(self, data_root: Path):
        step = HullLoftStep(config=HullLoftConfig(), data_root=data_root)
        assert step.validate_inputs(HullLoftInput(ship_file=Path("/nonexistent/ship.json"))) is False

    def test_execute_with_profiles(self, data_root: Path, ship_json: Path):
        top_file = save_profile(FLAT, data_root / "interim" / "top.json")
        side_file = save_profile(FLAT, data_root / "interim" / "side.json")
        step = HullLoftStep(config=HullLoftConfig(), data_root=data_root)
        out = step.execute(HullLoftInput(ship_file=ship_json, top_profile_file=top_file, side_profile_file=side_file))

        assert out.hull_file.exists()
        assert out.num_vertices == 225
        (hull,) = load_geometries(out.hull_file)
        np.testing.assert_allclose(_size(hull), [30.0, 10.0, 200.0], rtol=0.01)

    def test_execute_without_profiles_uses_taper(self, data_root: Path, ship_json: Path):
        step = HullLoftStep(config=HullLoftConfig(), data_root=data_root)
        out = step.execute(HullLoftInput(ship_file=ship_json))
        (hull,) = load_geometries(out.hull_file)
        assert is_watertight(hull.vertices, hull.faces)

    def test_execute_bad_ship(self, data_root: Path):
        ship = data_root / "raw" / "bad.json"
        ship.write_text(json.dumps({"length": 100, "beam": 0, "draft": 5}))
        step = HullLoftStep(config=HullLoftConfig(), data_root=data_root)
        with pytest.raises(ValidationError):
            step.execute(HullLoftInput(ship_file=ship))
