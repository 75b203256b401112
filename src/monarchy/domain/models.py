"""Dataclasses describing the kingdom records the combat rules operate on.

The ORM layer stores the same concepts in relational tables; persistence
adapters translate rows into these dataclasses so the rules layer never
touches the database directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType

from .enums import (
    Era,
    RestorationKind,
    ResultTier,
    TerrainType,
    TerritoryKind,
    WarStatus,
)

# --- Strongly typed identifiers -------------------------------------------------

KingdomID = NewType("KingdomID", str)
TerritoryID = NewType("TerritoryID", str)
BattleReportID = NewType("BattleReportID", str)
WarDeclarationID = NewType("WarDeclarationID", str)
RestorationID = NewType("RestorationID", str)

UnitCounts = dict[str, int]

COMBAT_FOCUS = "combat_focus"


# --- Kingdom aggregate ------------------------------------------------------------


@dataclass(slots=True)
class Resources:
    """Spendable kingdom resources.  Land never drops below 1000."""

    gold: int = 0
    population: int = 0
    mana: int = 0
    land: int = 1000
    turns_balance: int = 0


@dataclass(frozen=True, slots=True)
class ActiveEffect:
    """Temporary buff applied to a kingdom."""

    effect_type: str
    expires_at: datetime
    magnitude: float | None = None

    def is_active(self, at: datetime) -> bool:
        return self.expires_at > at


@dataclass(slots=True)
class Kingdom:
    """Persistent kingdom record as seen by the combat rules."""

    id: KingdomID
    owner_id: str
    name: str
    race: str
    era: Era = Era.EARLY
    unit_counts: UnitCounts = field(default_factory=dict)
    resources: Resources = field(default_factory=Resources)
    active_effects: list[ActiveEffect] = field(default_factory=list)


@dataclass(slots=True)
class Territory:
    id: TerritoryID
    owner_kingdom_id: KingdomID
    name: str
    kind: TerritoryKind
    terrain_type: TerrainType
    defense_level: int = 0

    @property
    def is_capital(self) -> bool:
        return self.kind == TerritoryKind.CAPITAL


# --- Records produced or consumed by combat ---------------------------------------


@dataclass(frozen=True, slots=True)
class BattleReport:
    """Immutable log entry written once per resolved attack."""

    attacker_id: KingdomID
    defender_id: KingdomID
    result_tier: ResultTier
    power_ratio: float
    casualties: Mapping[str, Mapping[str, int]]
    land_gained: int
    gold_looted: int
    timestamp: datetime
    attack_type: str = "standard"
    id: BattleReportID | None = None


@dataclass(slots=True)
class WarDeclaration:
    id: WarDeclarationID
    attacker_id: KingdomID
    defender_id: KingdomID
    status: WarStatus = WarStatus.ACTIVE
    attack_count: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == WarStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class RestorationStatus:
    """Recovery period; expires at ``end_time`` without explicit deletion."""

    kingdom_id: KingdomID
    kind: RestorationKind
    start_time: datetime
    end_time: datetime
    allowed_actions: tuple[str, ...]
    prohibited_actions: tuple[str, ...]
    id: RestorationID | None = None

    def is_active(self, at: datetime) -> bool:
        return self.start_time <= at < self.end_time

    def prohibits(self, action: str) -> bool:
        return action in self.prohibited_actions


# --- Request ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AttackRequest:
    """Inputs for one attack.  Validation happens in the combat service."""

    attacker_id: str | None
    defender_id: str | None
    units: Mapping[str, int] | None
    formation_id: str | None = None
    terrain_id: str | None = None
    attack_type: str = "standard"
    seed: str | None = None


@dataclass(frozen=True, slots=True)
class CombatContext:
    """A validated request with both kingdoms loaded."""

    attacker: Kingdom
    defender: Kingdom
    units: UnitCounts
    formation_id: str | None
    terrain_id: str | None
    attack_type: str
    at: datetime
    seed: str | None = None
