"""Configuration for Step 03: Component placement."""

from pydantic import BaseModel, Field


class TurretConfig(BaseModel):
    barrels_per_turret: int = Field(3, ge=0, description="Parallel barrels per turret")
    barrel_length: float = Field(2.0, gt=0, description="Barrel length as a multiple of turret radius")
    barrel_radius: float = Field(0.08, gt=0, description="Barrel radius as a fraction of turret radius")
    turret_height: float = Field(0.25, gt=0, description="Turret height as a fraction of draft")
    turret_radius: float = Field(0.6, gt=0, description="Turret radius as a fraction of local half-beam")
    min_radius_fraction: float = Field(
        0.05, ge=0, description="Lower bound on turret radius as a fraction of beam"
    )
    sides: int = Field(12, ge=3, description="Turret cylinder segments")
    barrel_sides: int = Field(6, ge=3, description="Barrel cylinder segments")


class SuperstructureConfig(BaseModel):
    width_fraction: float = Field(0.5, gt=0, le=1.0, description="Width as a fraction of beam")
    height_fraction: float = Field(0.8, gt=0, description="Height as a fraction of draft")


class FunnelConfig(BaseModel):
    radius: float = Field(0.08, gt=0, description="Funnel radius as a fraction of beam")
    height: float = Field(0.9, gt=0, description="Funnel height as a fraction of draft")
    sides: int = Field(12, ge=3, description="Funnel cylinder segments")


class ComponentPlacementConfig(BaseModel):
    turret: TurretConfig = Field(default_factory=TurretConfig)
    superstructure: SuperstructureConfig = Field(default_factory=SuperstructureConfig)
    funnel: FunnelConfig = Field(default_factory=FunnelConfig)
    use_detected_turrets: bool = Field(
        True, description="Use turret candidates from s01 when the ship description has none"
    )
