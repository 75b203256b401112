from typing import Any

from pydantic import BaseModel, Field

from monarchy.domain.enums import ErrorCode, ResultTier
from monarchy.domain.models import AttackRequest


class AttackRequestIn(BaseModel):
    # Fields stay permissive so the service reports MISSING_PARAMS/INVALID_PARAM
    # in its own envelope instead of a framework 422.
    attacker_id: str | None = Field(None, description="Attacking kingdom id")
    defender_id: str | None = Field(None, description="Defending kingdom id")
    units: dict[str, Any] | None = Field(None, description="Unit type to committed count")
    formation_id: str | None = Field(None, description="Formation id (aliases accepted)")
    terrain_id: str | None = Field(
        None, description="Terrain id; defaults to the defender's capital terrain"
    )
    attack_type: str = Field(default="standard", description="Free-form attack label")
    seed: str | None = Field(None, description="Replay token for the land-gain roll")

    def to_domain(self) -> AttackRequest:
        return AttackRequest(
            attacker_id=self.attacker_id,
            defender_id=self.defender_id,
            units=self.units,
            formation_id=self.formation_id,
            terrain_id=self.terrain_id,
            attack_type=self.attack_type,
            seed=self.seed,
        )


class CasualtiesOut(BaseModel):
    attacker: dict[str, int] = Field(default_factory=dict)
    defender: dict[str, int] = Field(default_factory=dict)


class CombatResultOut(BaseModel):
    success: bool = True
    result_tier: ResultTier
    power_ratio: float = Field(..., ge=0.0)
    casualties: CasualtiesOut
    land_gained: int = Field(..., ge=0)
    gold_looted: int = Field(..., ge=0)
    message: str
    attack_succeeded: bool


class CombatPreviewOut(BaseModel):
    success: bool = True
    result_tier: ResultTier
    power_ratio: float = Field(..., ge=0.0)
    casualties: CasualtiesOut
    land_gained: int = Field(..., ge=0)
    gold_looted: int = Field(..., ge=0)
    war_required: bool


class CombatErrorOut(BaseModel):
    success: bool = False
    error_code: ErrorCode
    error: str
