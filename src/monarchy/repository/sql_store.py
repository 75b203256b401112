"""SQLAlchemy implementations of the combat store protocols.

Every numeric mutation is a single ``UPDATE ... SET col = col + :delta``
statement with its floor expressed as a SQL ``CASE``, so concurrent handlers
touching the same kingdom never lose an update.  Each public write commits on
its own; callers that need several writes get several commits.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session, selectinload

from monarchy.domain import models as dm
from monarchy.domain.enums import (
    Era,
    RestorationKind,
    ResultTier,
    TerritoryKind,
    WarStatus,
)
from monarchy.domain.modifiers import normalize_terrain
from monarchy.models import (
    BattleReport,
    Kingdom,
    KingdomUnit,
    RestorationStatus,
    Territory,
    WarDeclaration,
    as_utc,
)


class _SessionStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


class SqlKingdomStore(_SessionStore):
    """Kingdom reads and atomic counter updates."""

    def get(self, kingdom_id: dm.KingdomID) -> dm.Kingdom | None:
        row = self.session.execute(
            select(Kingdom)
            .where(Kingdom.id == kingdom_id)
            .options(selectinload(Kingdom.units), selectinload(Kingdom.effects))
        ).scalar_one_or_none()
        if row is None:
            return None
        return _kingdom_to_domain(row)

    def apply_unit_losses(self, kingdom_id: dm.KingdomID, losses: Mapping[str, int]) -> None:
        try:
            for unit_type, lost in losses.items():
                if lost <= 0:
                    continue
                self.session.execute(
                    update(KingdomUnit)
                    .where(KingdomUnit.kingdom_id == kingdom_id, KingdomUnit.unit_type == unit_type)
                    .values(
                        count=case(
                            (KingdomUnit.count > lost, KingdomUnit.count - lost),
                            else_=0,
                        )
                    )
                    .execution_options(synchronize_session=False)
                )
        except Exception:
            self.session.rollback()
            raise
        self._commit()

    def adjust_resources(
        self,
        kingdom_id: dm.KingdomID,
        *,
        gold_delta: int = 0,
        land_delta: int = 0,
        land_floor: int = 1000,
    ) -> None:
        values = {}
        if gold_delta:
            values["gold"] = case(
                (Kingdom.gold + gold_delta > 0, Kingdom.gold + gold_delta),
                else_=0,
            )
        if land_delta:
            values["land"] = case(
                (Kingdom.land + land_delta > land_floor, Kingdom.land + land_delta),
                else_=land_floor,
            )
        if not values:
            return
        try:
            self.session.execute(
                update(Kingdom)
                .where(Kingdom.id == kingdom_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
        except Exception:
            self.session.rollback()
            raise
        self._commit()

    def deduct_turns(self, kingdom_id: dm.KingdomID, amount: int) -> None:
        try:
            self.session.execute(
                update(Kingdom)
                .where(Kingdom.id == kingdom_id)
                .values(
                    turns_balance=case(
                        (Kingdom.turns_balance > amount, Kingdom.turns_balance - amount),
                        else_=0,
                    )
                )
                .execution_options(synchronize_session=False)
            )
        except Exception:
            self.session.rollback()
            raise
        self._commit()


class SqlTerritoryStore(_SessionStore):
    def list_by_owner(self, kingdom_id: dm.KingdomID) -> list[dm.Territory]:
        rows = self.session.execute(
            select(Territory)
            .where(Territory.owner_kingdom_id == kingdom_id)
            .order_by(Territory.created_at, Territory.id)
        ).scalars()
        return [_territory_to_domain(row) for row in rows]

    def transfer(self, territory_id: dm.TerritoryID, new_owner_id: dm.KingdomID) -> None:
        try:
            self.session.execute(
                update(Territory)
                .where(Territory.id == territory_id)
                .values(owner_kingdom_id=new_owner_id)
                .execution_options(synchronize_session=False)
            )
        except Exception:
            self.session.rollback()
            raise
        self._commit()


class SqlBattleReportStore(_SessionStore):
    def create(self, report: dm.BattleReport) -> dm.BattleReport:
        row = BattleReport(
            attacker_id=report.attacker_id,
            defender_id=report.defender_id,
            attack_type=report.attack_type,
            result_tier=report.result_tier.value,
            power_ratio=report.power_ratio,
            casualties={side: dict(units) for side, units in report.casualties.items()},
            land_gained=report.land_gained,
            gold_looted=report.gold_looted,
            timestamp=report.timestamp,
        )
        self.session.add(row)
        self._commit()
        return _report_to_domain(row)

    def list_by_attacker_defender_pair(
        self, attacker_id: dm.KingdomID, defender_id: dm.KingdomID
    ) -> list[dm.BattleReport]:
        rows = self.session.execute(
            select(BattleReport)
            .where(BattleReport.attacker_id == attacker_id, BattleReport.defender_id == defender_id)
            .order_by(BattleReport.timestamp)
        ).scalars()
        return [_report_to_domain(row) for row in rows]


class SqlWarDeclarationStore(_SessionStore):
    def find_active(
        self, attacker_id: dm.KingdomID, defender_id: dm.KingdomID
    ) -> dm.WarDeclaration | None:
        row = self.session.execute(
            select(WarDeclaration)
            .where(
                WarDeclaration.attacker_id == attacker_id,
                WarDeclaration.defender_id == defender_id,
                WarDeclaration.status == WarStatus.ACTIVE.value,
            )
            .order_by(WarDeclaration.declared_at.desc())
            .limit(1)
        ).scalar_one_or_none()
        if row is None:
            return None
        return dm.WarDeclaration(
            id=dm.WarDeclarationID(row.id),
            attacker_id=dm.KingdomID(row.attacker_id),
            defender_id=dm.KingdomID(row.defender_id),
            status=WarStatus(row.status),
            attack_count=row.attack_count,
        )

    def increment_attack_count(self, declaration_id: dm.WarDeclarationID) -> None:
        try:
            self.session.execute(
                update(WarDeclaration)
                .where(WarDeclaration.id == declaration_id)
                .values(attack_count=WarDeclaration.attack_count + 1)
                .execution_options(synchronize_session=False)
            )
        except Exception:
            self.session.rollback()
            raise
        self._commit()


class SqlRestorationStore(_SessionStore):
    def create(self, status: dm.RestorationStatus) -> dm.RestorationStatus:
        row = RestorationStatus(
            kingdom_id=status.kingdom_id,
            kind=status.kind.value,
            start_time=status.start_time,
            end_time=status.end_time,
            allowed_actions=list(status.allowed_actions),
            prohibited_actions=list(status.prohibited_actions),
        )
        self.session.add(row)
        self._commit()
        return _restoration_to_domain(row)

    def find_active(self, kingdom_id: dm.KingdomID, at: datetime) -> list[dm.RestorationStatus]:
        rows = self.session.execute(
            select(RestorationStatus).where(
                RestorationStatus.kingdom_id == kingdom_id,
                RestorationStatus.start_time <= at,
                RestorationStatus.end_time > at,
            )
        ).scalars()
        return [_restoration_to_domain(row) for row in rows]


@dataclass(slots=True)
class SqlStores:
    """All combat stores bound to one session."""

    kingdoms: SqlKingdomStore
    territories: SqlTerritoryStore
    battle_reports: SqlBattleReportStore
    war_declarations: SqlWarDeclarationStore
    restorations: SqlRestorationStore

    @classmethod
    def from_session(cls, session: Session) -> SqlStores:
        return cls(
            kingdoms=SqlKingdomStore(session),
            territories=SqlTerritoryStore(session),
            battle_reports=SqlBattleReportStore(session),
            war_declarations=SqlWarDeclarationStore(session),
            restorations=SqlRestorationStore(session),
        )


# --- Row to domain conversion ------------------------------------------------------


def _kingdom_to_domain(row: Kingdom) -> dm.Kingdom:
    return dm.Kingdom(
        id=dm.KingdomID(row.id),
        owner_id=row.owner_id,
        name=row.name,
        race=row.race,
        era=Era(row.era),
        unit_counts={unit.unit_type: unit.count for unit in row.units},
        resources=dm.Resources(
            gold=row.gold,
            population=row.population,
            mana=row.mana,
            land=row.land,
            turns_balance=row.turns_balance,
        ),
        active_effects=[
            dm.ActiveEffect(
                effect_type=effect.effect_type,
                expires_at=as_utc(effect.expires_at),
                magnitude=effect.magnitude,
            )
            for effect in row.effects
        ],
    )


def _territory_to_domain(row: Territory) -> dm.Territory:
    return dm.Territory(
        id=dm.TerritoryID(row.id),
        owner_kingdom_id=dm.KingdomID(row.owner_kingdom_id),
        name=row.name,
        kind=TerritoryKind(row.kind),
        terrain_type=normalize_terrain(row.terrain_type),
        defense_level=row.defense_level,
    )


def _report_to_domain(row: BattleReport) -> dm.BattleReport:
    return dm.BattleReport(
        id=dm.BattleReportID(row.id),
        attacker_id=dm.KingdomID(row.attacker_id),
        defender_id=dm.KingdomID(row.defender_id),
        attack_type=row.attack_type,
        result_tier=ResultTier(row.result_tier),
        power_ratio=row.power_ratio,
        casualties=row.casualties,
        land_gained=row.land_gained,
        gold_looted=row.gold_looted,
        timestamp=as_utc(row.timestamp),
    )


def _restoration_to_domain(row: RestorationStatus) -> dm.RestorationStatus:
    return dm.RestorationStatus(
        id=dm.RestorationID(row.id),
        kingdom_id=dm.KingdomID(row.kingdom_id),
        kind=RestorationKind(row.kind),
        start_time=as_utc(row.start_time),
        end_time=as_utc(row.end_time),
        allowed_actions=tuple(row.allowed_actions),
        prohibited_actions=tuple(row.prohibited_actions),
    )
