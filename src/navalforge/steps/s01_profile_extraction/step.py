"""Step 01: Trace beam and draft profiles from orthographic blueprint views.

Reads a plan view and a side view (or one combined blueprint that is split
into both), estimates each view's background, and writes normalized
profile curves:
- top_profile.json  : beam distribution along the length
- side_profile.json : draft distribution along the length
- sheer_profile.json: deck line height from the side view (optional)
"""

from __future__ import annotations

import logging
from typing import ClassVar

from navalforge.core.step_base import BaseStep
from navalforge.utils.io import load_pixel_buffer, save_profile
from .config import ProfileExtractionConfig
from .contracts import ProfileExtractionInput, ProfileExtractionOutput

logger = logging.getLogger(__name__)


class ProfileExtractionStep(
    BaseStep[ProfileExtractionInput, ProfileExtractionOutput, ProfileExtractionConfig]
):
    name: ClassVar[str] = "profile_extraction"
    input_type: ClassVar = ProfileExtractionInput
    output_type: ClassVar = ProfileExtractionOutput
    config_type: ClassVar = ProfileExtractionConfig

    def validate_inputs(self, inputs: ProfileExtractionInput) -> bool:
        paths = [inputs.top_view_path, inputs.side_view_path, inputs.blueprint_path]
        if not any(paths):
            logger.error("No top view, side view or blueprint image given")
            return False
        for path in paths:
            if path is not None and not path.exists():
                logger.error(f"Image not found: {path}")
                return False
        return True

    def _load_views(self, inputs: ProfileExtractionInput):
        """Return (top, side) as (buffer, background) pairs, None when unavailable.

        Views cut from a blueprint are tight crops of the drawing, so they
        reuse the background estimated on the whole sheet.
        """
        from ._background import detect_background
        from ._views import split_blueprint

        top = (load_pixel_buffer(inputs.top_view_path), None) if inputs.top_view_path else None
        side = (load_pixel_buffer(inputs.side_view_path), None) if inputs.side_view_path else None

        if inputs.blueprint_path and (top is None or side is None):
            blueprint = load_pixel_buffer(inputs.blueprint_path)
            mode = None if self.config.background_mode == "auto" else self.config.background_mode
            bg = detect_background(blueprint, mode=mode, custom_color=self.config.custom_background)
            split_top, split_side = split_blueprint(
                blueprint, bg.color, self.config.threshold, view_order=self.config.view_order
            )
            top = top if top is not None else (split_top, bg)
            side = side if side is not None else (split_side, bg)
        return top, side

    def run(self, inputs: ProfileExtractionInput) -> ProfileExtractionOutput:
        from ._trace import trace_view

        output_dir = self.output_dir
        top, side = self._load_views(inputs)
        result = ProfileExtractionOutput()

        if top is not None:
            view, known_bg = top
            profile, bg = trace_view(view, self.config, background=known_bg)
            result.top_profile_file = save_profile(profile, output_dir / "top_profile.json")
            result.background_color = list(bg.color)
            result.background_confidence = bg.confidence
            logger.info(
                f"Top profile: {profile.resolution} samples, peak {profile.bounds.peak_value:.0f}px "
                f"(background {bg.method}, conf={bg.confidence:.2f})"
            )

            if self.config.detect_turrets:
                from ._turrets import detect_turret_positions

                result.turret_candidates = detect_turret_positions(view, bg.color, self.config.threshold)

        if side is not None:
            view, known_bg = side
            profile, bg = trace_view(view, self.config, background=known_bg)
            result.side_profile_file = save_profile(profile, output_dir / "side_profile.json")
            logger.info(f"Side profile: {profile.resolution} samples, peak {profile.bounds.peak_value:.0f}px")

            if self.config.extract_sheer:
                sheer, _ = trace_view(view, self.config, measure="top_edge", background=bg)
                result.sheer_profile_file = save_profile(sheer, output_dir / "sheer_profile.json")

        return result
