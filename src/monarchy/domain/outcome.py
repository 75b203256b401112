"""Result tiers, casualty rates, and battle rewards."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass

from .enums import ResultTier
from .models import UnitCounts
from .rules_config import DEFAULT_RULES, CombatRules


@dataclass(frozen=True, slots=True)
class CasualtyRates:
    attacker: float
    defender: float


@dataclass(frozen=True, slots=True)
class Classification:
    tier: ResultTier
    power_ratio: float
    rates: CasualtyRates

    @property
    def success(self) -> bool:
        return self.tier != ResultTier.FAILED


def power_ratio(attacker_power: float, defender_power: float) -> float:
    if defender_power > 0:
        return attacker_power / defender_power
    return attacker_power


def classify_ratio(ratio: float, rules: CombatRules = DEFAULT_RULES.combat) -> ResultTier:
    if ratio >= rules.with_ease_ratio:
        return ResultTier.WITH_EASE
    if ratio >= rules.good_fight_ratio:
        return ResultTier.GOOD_FIGHT
    return ResultTier.FAILED


def casualty_rates(tier: ResultTier, rules: CombatRules = DEFAULT_RULES.combat) -> CasualtyRates:
    if tier == ResultTier.WITH_EASE:
        return CasualtyRates(rules.with_ease_attacker_rate, rules.with_ease_defender_rate)
    if tier == ResultTier.GOOD_FIGHT:
        return CasualtyRates(rules.good_fight_attacker_rate, rules.good_fight_defender_rate)
    return CasualtyRates(rules.failed_attacker_rate, rules.failed_defender_rate)


def classify(
    attacker_power: float,
    defender_power: float,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> Classification:
    """Turn two power figures into a tier and its casualty-rate pair."""

    ratio = power_ratio(attacker_power, defender_power)
    tier = classify_ratio(ratio, rules)
    return Classification(tier=tier, power_ratio=ratio, rates=casualty_rates(tier, rules))


def calculate_casualties(units: Mapping[str, int], rate: float) -> UnitCounts:
    """Whole-unit losses per type; never more than the units present."""

    return {
        unit_type: min(count, max(0, math.floor(count * rate)))
        for unit_type, count in units.items()
    }


def calculate_land_gained(
    tier: ResultTier,
    defender_land: int,
    random_factor: float,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> int:
    """Acres taken from the defender.

    ``random_factor`` is a draw in ``[0, 1)``; 0.5 yields the base gain.
    """

    if tier == ResultTier.FAILED or defender_land <= 0:
        return 0
    if not 0.0 <= random_factor < 1.0:
        raise ValueError(f"random_factor must be in [0, 1), got {random_factor}")
    base_gain = rules.with_ease_land_gain if tier == ResultTier.WITH_EASE else rules.good_fight_land_gain
    spread = 1 + (random_factor - 0.5) * rules.land_variance
    return max(0, math.floor(defender_land * base_gain * spread))


def calculate_gold_looted(land_gained: int, rules: CombatRules = DEFAULT_RULES.combat) -> int:
    return land_gained * rules.gold_per_acre
