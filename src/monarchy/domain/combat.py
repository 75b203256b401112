"""Pure battle pipeline.

Given committed units, the defender's garrison and land, a resolved
``ModifierSet`` and an explicit random draw, produce the full outcome.  The
function has no side effects, so identical inputs always give identical
results.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .enums import ResultTier, Side
from .modifiers import NEUTRAL_MODIFIERS, ModifierSet
from .models import UnitCounts
from .outcome import (
    calculate_casualties,
    calculate_gold_looted,
    calculate_land_gained,
    classify,
)
from .power import calculate_power, effective_attacker_units, effective_defender_units
from .rules_config import DEFAULT_RULES, CombatRules
from .tables import DEFAULT_TABLES, ModifierTables


@dataclass(frozen=True, slots=True)
class BattleOutcome:
    """Summary of a resolved battle."""

    result_tier: ResultTier
    power_ratio: float
    attacker_power: float
    defender_power: float
    attacker_casualties: UnitCounts
    defender_casualties: UnitCounts
    land_gained: int
    gold_looted: int
    effective_attacker_units: UnitCounts = field(default_factory=dict)
    effective_defender_units: UnitCounts = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.result_tier != ResultTier.FAILED

    @property
    def casualties(self) -> dict[str, UnitCounts]:
        return {
            Side.ATTACKER.value: dict(self.attacker_casualties),
            Side.DEFENDER.value: dict(self.defender_casualties),
        }

    def summary(self) -> str:
        return (
            f"Combat {self.result_tier.value}: {self.land_gained} land gained, "
            f"{self.gold_looted} gold looted"
        )


def simulate_battle(
    attacker_units: Mapping[str, int],
    defender_units: Mapping[str, int],
    defender_land: int,
    *,
    modifiers: ModifierSet = NEUTRAL_MODIFIERS,
    random_factor: float = 0.5,
    tables: ModifierTables = DEFAULT_TABLES,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> BattleOutcome:
    """Resolve one attack without touching any store."""

    attacker_effective = effective_attacker_units(attacker_units, modifiers, tables)
    defender_effective = effective_defender_units(defender_units, modifiers)

    attacker_power = calculate_power(attacker_effective, "attack", tables=tables)
    defender_power = calculate_power(defender_effective, "defense", tables=tables)
    classification = classify(attacker_power, defender_power, rules)

    # Losses come out of the real units, not the modifier-inflated ones.
    attacker_casualties = calculate_casualties(attacker_units, classification.rates.attacker)
    defender_casualties = calculate_casualties(defender_units, classification.rates.defender)

    land_gained = calculate_land_gained(classification.tier, defender_land, random_factor, rules)

    return BattleOutcome(
        result_tier=classification.tier,
        power_ratio=classification.power_ratio,
        attacker_power=attacker_power,
        defender_power=defender_power,
        attacker_casualties=attacker_casualties,
        defender_casualties=defender_casualties,
        land_gained=land_gained,
        gold_looted=calculate_gold_looted(land_gained, rules),
        effective_attacker_units=attacker_effective,
        effective_defender_units=defender_effective,
    )
