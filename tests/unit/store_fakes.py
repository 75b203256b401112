"""In-memory store fakes for service tests."""

from dataclasses import replace
from datetime import datetime

from monarchy.domain.models import (
    BattleReport,
    BattleReportID,
    Kingdom,
    RestorationID,
    RestorationStatus,
    Territory,
)


class FakeKingdoms:
    def __init__(self, *kingdoms: Kingdom):
        self.kingdoms = {kingdom.id: kingdom for kingdom in kingdoms}
        self.writes: list[tuple] = []

    def get(self, kingdom_id):
        return self.kingdoms.get(kingdom_id)

    def apply_unit_losses(self, kingdom_id, losses):
        self.writes.append(("units", kingdom_id, dict(losses)))
        counts = self.kingdoms[kingdom_id].unit_counts
        for unit_type, lost in losses.items():
            counts[unit_type] = max(0, counts.get(unit_type, 0) - lost)

    def adjust_resources(self, kingdom_id, *, gold_delta=0, land_delta=0, land_floor=1000):
        self.writes.append(("resources", kingdom_id, gold_delta, land_delta))
        resources = self.kingdoms[kingdom_id].resources
        resources.gold = max(0, resources.gold + gold_delta)
        resources.land = max(land_floor, resources.land + land_delta)

    def deduct_turns(self, kingdom_id, amount):
        self.writes.append(("turns", kingdom_id, amount))
        resources = self.kingdoms[kingdom_id].resources
        resources.turns_balance = max(0, resources.turns_balance - amount)


class FakeTerritories:
    def __init__(self, *territories: Territory):
        self.territories = {territory.id: territory for territory in territories}
        self.transfers: list[tuple] = []

    def list_by_owner(self, kingdom_id):
        return [t for t in self.territories.values() if t.owner_kingdom_id == kingdom_id]

    def transfer(self, territory_id, new_owner_id):
        self.transfers.append((territory_id, new_owner_id))
        self.territories[territory_id].owner_kingdom_id = new_owner_id


class FakeBattleReports:
    def __init__(self, *reports: BattleReport):
        self.reports = list(reports)

    def create(self, report):
        stored = replace(report, id=BattleReportID(f"report-{len(self.reports) + 1}"))
        self.reports.append(stored)
        return stored

    def list_by_attacker_defender_pair(self, attacker_id, defender_id):
        return [
            r for r in self.reports if r.attacker_id == attacker_id and r.defender_id == defender_id
        ]


class FakeWarDeclarations:
    def __init__(self, *declarations):
        self.declarations = {d.id: d for d in declarations}

    def find_active(self, attacker_id, defender_id):
        for declaration in self.declarations.values():
            if (
                declaration.attacker_id == attacker_id
                and declaration.defender_id == defender_id
                and declaration.is_active
            ):
                return declaration
        return None

    def increment_attack_count(self, declaration_id):
        self.declarations[declaration_id].attack_count += 1


class FakeRestorations:
    def __init__(self, *statuses: RestorationStatus):
        self.statuses = list(statuses)

    def create(self, status):
        stored = replace(status, id=RestorationID(f"restoration-{len(self.statuses) + 1}"))
        self.statuses.append(stored)
        return stored

    def find_active(self, kingdom_id, at: datetime):
        return [s for s in self.statuses if s.kingdom_id == kingdom_id and s.is_active(at)]
