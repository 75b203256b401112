"""Declarative rule configuration for the combat domain."""

from __future__ import annotations

from dataclasses import dataclass

# Shared with the economy screens; keep in step with any "gold per acre" figure.
GOLD_PER_ACRE = 1000


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Thresholds, casualty rates, and land-gain constants."""

    with_ease_ratio: float = 2.0
    good_fight_ratio: float = 1.2
    with_ease_attacker_rate: float = 0.05
    with_ease_defender_rate: float = 0.20
    good_fight_attacker_rate: float = 0.15
    good_fight_defender_rate: float = 0.15
    failed_attacker_rate: float = 0.25
    failed_defender_rate: float = 0.05
    with_ease_land_gain: float = 0.0735
    good_fight_land_gain: float = 0.068
    land_gain_min: float = 0.0679
    land_gain_max: float = 0.0735
    gold_per_acre: int = GOLD_PER_ACRE
    land_floor: int = 1000
    turn_cost: int = 4
    combat_focus_bonus: float = 1.20

    @property
    def land_variance(self) -> float:
        """Relative spread of the land-gain band."""

        midpoint = (self.land_gain_max + self.land_gain_min) / 2
        return (self.land_gain_max - self.land_gain_min) / midpoint


@dataclass(frozen=True, slots=True)
class WarRules:
    """Repeated-aggression gate."""

    attacks_before_declaration: int = 3


@dataclass(frozen=True, slots=True)
class RestorationRules:
    """Recovery-period triggers and durations."""

    land_loss_threshold: float = 0.5
    damage_based_hours: int = 48
    death_based_hours: int = 72
    prohibited_actions: tuple[str, ...] = ("attack", "trade", "build", "train")
    allowed_actions: tuple[str, ...] = ("view", "message", "diplomacy")


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    combat: CombatRules = CombatRules()
    war: WarRules = WarRules()
    restoration: RestorationRules = RestorationRules()


DEFAULT_RULES = RulesConfig()
