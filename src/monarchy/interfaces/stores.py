"""Store Protocol Interfaces.

This module defines the persistence contracts the combat service depends on.
Numeric mutations are expressed as deltas rather than whole-record writes so
implementations can apply them atomically.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol

from monarchy.domain.models import (
    BattleReport,
    Kingdom,
    KingdomID,
    RestorationStatus,
    Territory,
    TerritoryID,
    WarDeclaration,
    WarDeclarationID,
)


class KingdomStore(Protocol):
    """Read kingdoms and apply counter updates to them."""

    def get(self, kingdom_id: KingdomID) -> Kingdom | None:
        """Load a kingdom with its units and effects, or None if missing."""
        ...

    def apply_unit_losses(self, kingdom_id: KingdomID, losses: Mapping[str, int]) -> None:
        """Subtract losses per unit type, never taking a count below zero."""
        ...

    def adjust_resources(
        self,
        kingdom_id: KingdomID,
        *,
        gold_delta: int = 0,
        land_delta: int = 0,
        land_floor: int = 1000,
    ) -> None:
        """Add (or subtract) gold and land.

        Gold is floored at 0 and land at ``land_floor``.
        """
        ...

    def deduct_turns(self, kingdom_id: KingdomID, amount: int) -> None:
        """Subtract action turns, floored at 0."""
        ...


class TerritoryStore(Protocol):
    def list_by_owner(self, kingdom_id: KingdomID) -> list[Territory]: ...

    def transfer(self, territory_id: TerritoryID, new_owner_id: KingdomID) -> None: ...


class BattleReportStore(Protocol):
    def create(self, report: BattleReport) -> BattleReport:
        """Persist a report and return it with its assigned id."""
        ...

    def list_by_attacker_defender_pair(
        self, attacker_id: KingdomID, defender_id: KingdomID
    ) -> list[BattleReport]: ...


class WarDeclarationStore(Protocol):
    def find_active(
        self, attacker_id: KingdomID, defender_id: KingdomID
    ) -> WarDeclaration | None: ...

    def increment_attack_count(self, declaration_id: WarDeclarationID) -> None: ...


class RestorationStore(Protocol):
    def create(self, status: RestorationStatus) -> RestorationStatus: ...

    def find_active(self, kingdom_id: KingdomID, at: datetime) -> list[RestorationStatus]:
        """Statuses whose window contains ``at``."""
        ...
