"""Restoration (recovery period) rules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .enums import RestorationKind
from .models import KingdomID, RestorationStatus
from .rules_config import DEFAULT_RULES, RestorationRules


@dataclass(frozen=True, slots=True)
class LandAssessment:
    pre_land: int
    post_land: int
    land_loss_percent: float
    floor_reached: bool


def assess_land_loss(defender_land: int, land_gained: int, land_floor: int) -> LandAssessment:
    """Post-battle land position for the defender.

    A defender with no land at all is treated as already sitting on the floor.
    """

    post_land = max(land_floor, defender_land - land_gained)
    if defender_land <= 0:
        return LandAssessment(defender_land, post_land, 0.0, True)
    return LandAssessment(
        pre_land=defender_land,
        post_land=post_land,
        land_loss_percent=land_gained / defender_land,
        floor_reached=post_land <= land_floor,
    )


def restoration_kind(
    assessment: LandAssessment, rules: RestorationRules = DEFAULT_RULES.restoration
) -> RestorationKind | None:
    """``None`` when the damage does not warrant a recovery period."""

    if assessment.floor_reached:
        return RestorationKind.DEATH_BASED
    if assessment.land_loss_percent >= rules.land_loss_threshold:
        return RestorationKind.DAMAGE_BASED
    return None


def build_restoration(
    kingdom_id: KingdomID,
    kind: RestorationKind,
    start_time: datetime,
    rules: RestorationRules = DEFAULT_RULES.restoration,
) -> RestorationStatus:
    hours = rules.death_based_hours if kind == RestorationKind.DEATH_BASED else rules.damage_based_hours
    return RestorationStatus(
        kingdom_id=kingdom_id,
        kind=kind,
        start_time=start_time,
        end_time=start_time + timedelta(hours=hours),
        allowed_actions=rules.allowed_actions,
        prohibited_actions=rules.prohibited_actions,
    )
