"""Post-Combat State Updater for Monarchy.

Applies the consequences of a battle after its report has been written.
Every step is its own committed write.  A failing step is logged with the
``post_combat_step_failed`` marker and the remaining steps still run; the
battle itself already happened and is never reported as failed.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from monarchy.domain.combat import BattleOutcome
from monarchy.domain.models import Kingdom, RestorationStatus, Territory
from monarchy.domain.restoration import assess_land_loss, build_restoration, restoration_kind
from monarchy.domain.rules_config import DEFAULT_RULES, RulesConfig
from monarchy.interfaces.stores import KingdomStore, RestorationStore, TerritoryStore

logger = logging.getLogger(__name__)

STEP_RESTORATION = "restoration"
STEP_CASUALTIES = "casualties"
STEP_RESOURCES = "resource_transfer"
STEP_TURNS = "turn_deduction"
STEP_TERRITORY = "territory_transfer"
STEP_WAR_DECLARATION = "war_declaration"


@dataclass(slots=True)
class PostCombatReport:
    """What the updater managed to do."""

    restoration: RestorationStatus | None = None
    territory_transferred: Territory | None = None
    failed_steps: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_steps


def select_territory_for_transfer(territories: list[Territory]) -> Territory | None:
    """Lowest-defense territory that is not a capital, or None."""

    eligible = [territory for territory in territories if not territory.is_capital]
    if not eligible:
        return None
    return min(eligible, key=lambda territory: territory.defense_level)


class PostCombatUpdater:
    """Best-effort application of casualties, transfers, and restoration."""

    def __init__(
        self,
        kingdoms: KingdomStore,
        territories: TerritoryStore,
        restorations: RestorationStore,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.kingdoms = kingdoms
        self.territories = territories
        self.restorations = restorations
        self.rules = rules

    def apply(
        self,
        attacker: Kingdom,
        defender: Kingdom,
        outcome: BattleOutcome,
        at: datetime,
    ) -> PostCombatReport:
        """Run every post-combat step in order.

        Args:
            attacker: Attacker as loaded before the battle
            defender: Defender as loaded before the battle
            outcome: Result of the battle pipeline
            at: Battle time; restoration windows start here

        Returns:
            PostCombatReport listing created records and any failed steps
        """
        report = PostCombatReport()
        transfer = outcome.success and outcome.land_gained > 0

        steps: list[tuple[str, Callable[[], None]]] = [
            (STEP_RESTORATION, lambda: self._apply_restoration(report, defender, outcome, at)),
            (STEP_CASUALTIES, lambda: self._apply_casualties(attacker, defender, outcome)),
        ]
        if transfer:
            steps.append(
                (STEP_RESOURCES, lambda: self._transfer_resources(attacker, defender, outcome))
            )
        steps.append(
            (STEP_TURNS, lambda: self.kingdoms.deduct_turns(attacker.id, self.rules.combat.turn_cost))
        )
        if transfer:
            steps.append(
                (STEP_TERRITORY, lambda: self._transfer_territory(report, attacker, defender))
            )

        for step, action in steps:
            self._run(report, step, attacker, defender, action)
        return report

    def _run(
        self,
        report: PostCombatReport,
        step: str,
        attacker: Kingdom,
        defender: Kingdom,
        action: Callable[[], None],
    ) -> None:
        try:
            action()
        except Exception:
            report.failed_steps.append(step)
            logger.exception(
                "post_combat_step_failed step=%s attacker=%s defender=%s",
                step,
                attacker.id,
                defender.id,
            )

    def _apply_restoration(
        self,
        report: PostCombatReport,
        defender: Kingdom,
        outcome: BattleOutcome,
        at: datetime,
    ) -> None:
        assessment = assess_land_loss(
            defender.resources.land, outcome.land_gained, self.rules.combat.land_floor
        )
        kind = restoration_kind(assessment, self.rules.restoration)
        if kind is None:
            return
        status = build_restoration(defender.id, kind, at, self.rules.restoration)
        report.restoration = self.restorations.create(status)
        logger.info(
            "restoration_started kingdom=%s kind=%s ends=%s",
            defender.id,
            kind.value,
            status.end_time.isoformat(),
        )

    def _apply_casualties(self, attacker: Kingdom, defender: Kingdom, outcome: BattleOutcome) -> None:
        self.kingdoms.apply_unit_losses(attacker.id, outcome.attacker_casualties)
        self.kingdoms.apply_unit_losses(defender.id, outcome.defender_casualties)

    def _transfer_resources(self, attacker: Kingdom, defender: Kingdom, outcome: BattleOutcome) -> None:
        floor = self.rules.combat.land_floor
        self.kingdoms.adjust_resources(
            defender.id,
            gold_delta=-outcome.gold_looted,
            land_delta=-outcome.land_gained,
            land_floor=floor,
        )
        self.kingdoms.adjust_resources(
            attacker.id,
            gold_delta=outcome.gold_looted,
            land_delta=outcome.land_gained,
            land_floor=floor,
        )

    def _transfer_territory(self, report: PostCombatReport, attacker: Kingdom, defender: Kingdom) -> None:
        territory = select_territory_for_transfer(self.territories.list_by_owner(defender.id))
        if territory is None:
            return
        self.territories.transfer(territory.id, attacker.id)
        report.territory_transferred = territory
