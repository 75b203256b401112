"""Combat Resolution Service for Monarchy.

Orchestrates one attack: validation, restoration guard, War Gate, modifier
resolution, the pure battle pipeline, the battle report write, and the
post-combat updates.  Expected rejections come back as ``CombatRejected``
values; nothing raises for ordinary control flow.
"""

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from monarchy.domain.combat import BattleOutcome, simulate_battle
from monarchy.domain.enums import ErrorCode, ResultTier
from monarchy.domain.models import (
    AttackRequest,
    BattleReport,
    BattleReportID,
    CombatContext,
    Kingdom,
    KingdomID,
    UnitCounts,
)
from monarchy.domain.modifiers import ModifierResolver, ModifierSet
from monarchy.domain.rules_config import DEFAULT_RULES, RulesConfig
from monarchy.domain.tables import DEFAULT_TABLES, ModifierTables
from monarchy.domain.war import WarGateDecision
from monarchy.interfaces.stores import (
    BattleReportStore,
    KingdomStore,
    RestorationStore,
    TerritoryStore,
    WarDeclarationStore,
)
from monarchy.models.base import utc_now
from monarchy.services.post_combat import STEP_WAR_DECLARATION, PostCombatUpdater
from monarchy.services.war_gate import WarGateService
from monarchy.utils.rng import generate_seed, random_fraction

logger = logging.getLogger(__name__)

ATTACK_ACTION = "attack"
PREVIEW_RANDOM_FACTOR = 0.5
INTERNAL_ERROR_MESSAGE = "An internal error occurred while resolving combat"


# --- Tagged results ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CombatResolved:
    """The battle happened; side effects were applied best-effort."""

    result_tier: ResultTier
    power_ratio: float
    casualties: dict[str, UnitCounts]
    land_gained: int
    gold_looted: int
    message: str
    report_id: BattleReportID | None = None
    success: Literal[True] = True

    @property
    def attack_succeeded(self) -> bool:
        return self.result_tier != ResultTier.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "result_tier": self.result_tier.value,
            "power_ratio": self.power_ratio,
            "casualties": self.casualties,
            "land_gained": self.land_gained,
            "gold_looted": self.gold_looted,
            "message": self.message,
            "attack_succeeded": self.attack_succeeded,
        }


@dataclass(frozen=True, slots=True)
class CombatPreview:
    """Projected outcome at the median land roll; nothing was written."""

    result_tier: ResultTier
    power_ratio: float
    casualties: dict[str, UnitCounts]
    land_gained: int
    gold_looted: int
    war_required: bool
    modifiers: ModifierSet = field(default_factory=ModifierSet)
    success: Literal[True] = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "result_tier": self.result_tier.value,
            "power_ratio": self.power_ratio,
            "casualties": self.casualties,
            "land_gained": self.land_gained,
            "gold_looted": self.gold_looted,
            "war_required": self.war_required,
        }


@dataclass(frozen=True, slots=True)
class CombatRejected:
    """The attack did not happen and nothing was mutated (or an internal error)."""

    error_code: ErrorCode
    error: str
    success: Literal[False] = False

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error_code": self.error_code.value, "error": self.error}


CombatResult = CombatResolved | CombatRejected


def _reject(code: ErrorCode, message: str) -> CombatRejected:
    return CombatRejected(error_code=code, error=message)


class CombatService:
    """Service resolving attacks between kingdoms."""

    def __init__(
        self,
        kingdoms: KingdomStore,
        territories: TerritoryStore,
        battle_reports: BattleReportStore,
        war_declarations: WarDeclarationStore,
        restorations: RestorationStore,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        tables: ModifierTables = DEFAULT_TABLES,
        rng: Callable[[], float] = random.random,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.kingdoms = kingdoms
        self.territories = territories
        self.battle_reports = battle_reports
        self.restorations = restorations
        self.rules = rules
        self.tables = tables
        self.rng = rng
        self.clock = clock
        self.resolver = ModifierResolver(tables, rules.combat)
        self.war_gate = WarGateService(battle_reports, war_declarations, rules.war)
        self.post_combat = PostCombatUpdater(kingdoms, territories, restorations, rules)

    # --- Public operations --------------------------------------------------------

    def resolve_combat(self, request: AttackRequest) -> CombatResult:
        """Resolve one attack and apply its consequences.

        Args:
            request: Attack parameters as received from the caller

        Returns:
            CombatResolved once the battle report is written (even if a later
            side effect failed), otherwise CombatRejected
        """
        try:
            checked = self._prepare(request)
            if isinstance(checked, CombatRejected):
                return checked

            decision = self.war_gate.evaluate(checked.attacker.id, checked.defender.id)
            if not decision.allowed:
                return _reject(
                    ErrorCode.WAR_REQUIRED,
                    "A war declaration is required to keep attacking this kingdom",
                )
            outcome = self._simulate(checked, self._random_factor(checked))
            stored = self.battle_reports.create(self._build_report(checked, outcome))
        except Exception:
            logger.exception(
                "combat_resolution_failed attacker=%s defender=%s",
                request.attacker_id,
                request.defender_id,
            )
            return _reject(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        self._record_war_attack(checked, decision)
        self.post_combat.apply(checked.attacker, checked.defender, outcome, checked.at)

        logger.info(
            "combat_resolved attacker=%s defender=%s tier=%s ratio=%.3f land=%d gold=%d",
            checked.attacker.id,
            checked.defender.id,
            outcome.result_tier.value,
            outcome.power_ratio,
            outcome.land_gained,
            outcome.gold_looted,
        )
        return CombatResolved(
            result_tier=outcome.result_tier,
            power_ratio=outcome.power_ratio,
            casualties=outcome.casualties,
            land_gained=outcome.land_gained,
            gold_looted=outcome.gold_looted,
            message=outcome.summary(),
            report_id=stored.id,
        )

    def preview_combat(self, request: AttackRequest) -> CombatPreview | CombatRejected:
        """Project an attack without writing anything.

        The War Gate is reported through ``war_required`` rather than
        rejecting, and the land roll is fixed at its median.
        """
        try:
            checked = self._prepare(request)
            if isinstance(checked, CombatRejected):
                return checked
            decision = self.war_gate.evaluate(checked.attacker.id, checked.defender.id)
            modifiers = self._modifiers(checked)
            outcome = self._simulate(checked, PREVIEW_RANDOM_FACTOR, modifiers)
        except Exception:
            logger.exception("combat_preview_failed")
            return _reject(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        return CombatPreview(
            result_tier=outcome.result_tier,
            power_ratio=outcome.power_ratio,
            casualties=outcome.casualties,
            land_gained=outcome.land_gained,
            gold_looted=outcome.gold_looted,
            war_required=not decision.allowed,
            modifiers=modifiers,
        )

    # --- Validation -----------------------------------------------------------------

    def _prepare(self, request: AttackRequest) -> CombatContext | CombatRejected:
        rejected = self._validate_request(request)
        if rejected is not None:
            return rejected

        attacker_id = KingdomID(request.attacker_id)
        defender_id = KingdomID(request.defender_id)
        attacker = self.kingdoms.get(attacker_id)
        if attacker is None:
            return _reject(ErrorCode.NOT_FOUND, "Attacking kingdom not found")
        defender = self.kingdoms.get(defender_id)
        if defender is None:
            return _reject(ErrorCode.NOT_FOUND, "Defending kingdom not found")

        units = dict(request.units)
        rejected = self._check_units(attacker, units)
        if rejected is not None:
            return rejected

        turn_cost = self.rules.combat.turn_cost
        if attacker.resources.turns_balance < turn_cost:
            return _reject(
                ErrorCode.INSUFFICIENT_RESOURCES,
                f"Attacking costs {turn_cost} turns; only {attacker.resources.turns_balance} available",
            )

        at = self.clock()
        rejected = self._check_restoration(attacker, defender, at)
        if rejected is not None:
            return rejected

        return CombatContext(
            attacker=attacker,
            defender=defender,
            units=units,
            formation_id=request.formation_id,
            terrain_id=request.terrain_id,
            attack_type=request.attack_type or "standard",
            at=at,
            seed=request.seed,
        )

    def _validate_request(self, request: AttackRequest) -> CombatRejected | None:
        if not request.attacker_id or not request.defender_id or request.units is None:
            return _reject(
                ErrorCode.MISSING_PARAMS, "attacker_id, defender_id and units are required"
            )
        if request.attacker_id == request.defender_id:
            return _reject(ErrorCode.INVALID_PARAM, "A kingdom cannot attack itself")
        if not isinstance(request.units, Mapping) or not request.units:
            return _reject(ErrorCode.INVALID_PARAM, "units must map unit types to counts")
        for unit_type, count in request.units.items():
            if not isinstance(unit_type, str) or not unit_type:
                return _reject(ErrorCode.INVALID_PARAM, "Unit types must be non-empty strings")
            # bool is an int subclass; True is not a unit count.
            if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
                return _reject(
                    ErrorCode.INVALID_PARAM, f"Unit count for {unit_type} must be a positive integer"
                )
        return None

    def _check_units(self, attacker: Kingdom, units: UnitCounts) -> CombatRejected | None:
        for unit_type, count in units.items():
            owned = attacker.unit_counts.get(unit_type)
            if owned is None and unit_type not in self.tables.unit_stats:
                return _reject(ErrorCode.INVALID_PARAM, f"Unknown unit type: {unit_type}")
            if count > (owned or 0):
                logger.warning(
                    "unit_overcommit attacker=%s unit_type=%s requested=%d owned=%d",
                    attacker.id,
                    unit_type,
                    count,
                    owned or 0,
                )
                return _reject(
                    ErrorCode.INSUFFICIENT_RESOURCES, f"Not enough {unit_type} to commit {count}"
                )
        return None

    def _check_restoration(
        self, attacker: Kingdom, defender: Kingdom, at: datetime
    ) -> CombatRejected | None:
        for status in self.restorations.find_active(attacker.id, at):
            if status.prohibits(ATTACK_ACTION):
                return _reject(
                    ErrorCode.RESTORATION_ACTIVE,
                    "Your kingdom is in restoration and cannot attack",
                )
        if self.restorations.find_active(defender.id, at):
            return _reject(
                ErrorCode.RESTORATION_ACTIVE,
                "The target kingdom is in restoration and cannot be attacked",
            )
        return None

    # --- Battle -------------------------------------------------------------------------

    def _record_war_attack(self, context: CombatContext, decision: WarGateDecision) -> None:
        try:
            self.war_gate.record_attack(decision)
        except Exception:
            logger.exception(
                "post_combat_step_failed step=%s attacker=%s defender=%s",
                STEP_WAR_DECLARATION,
                context.attacker.id,
                context.defender.id,
            )

    def _resolve_terrain(self, context: CombatContext) -> str | None:
        if context.terrain_id:
            return context.terrain_id
        territories = self.territories.list_by_owner(context.defender.id)
        for territory in territories:
            if territory.is_capital:
                return territory.terrain_type.value
        if territories:
            return territories[0].terrain_type.value
        return None

    def _modifiers(self, context: CombatContext) -> ModifierSet:
        return self.resolver.resolve(
            formation_id=context.formation_id,
            terrain_id=self._resolve_terrain(context),
            attacker_race=context.attacker.race,
            defender_race=context.defender.race,
            attacker_era=context.attacker.era,
            attacker_effects=context.attacker.active_effects,
            at=context.at,
        )

    def _random_factor(self, context: CombatContext) -> float:
        if context.seed:
            seed = generate_seed(
                context.attacker.id,
                context.defender.id,
                context="land_variance",
                nonce=context.seed,
            )
            return random_fraction(seed)["value"]
        return self.rng()

    def _simulate(
        self,
        context: CombatContext,
        random_factor: float,
        modifiers: ModifierSet | None = None,
    ) -> BattleOutcome:
        return simulate_battle(
            context.units,
            context.defender.unit_counts,
            context.defender.resources.land,
            modifiers=modifiers or self._modifiers(context),
            random_factor=random_factor,
            tables=self.tables,
            rules=self.rules.combat,
        )

    def _build_report(self, context: CombatContext, outcome: BattleOutcome) -> BattleReport:
        return BattleReport(
            attacker_id=context.attacker.id,
            defender_id=context.defender.id,
            result_tier=outcome.result_tier,
            power_ratio=outcome.power_ratio,
            casualties=outcome.casualties,
            land_gained=outcome.land_gained,
            gold_looted=outcome.gold_looted,
            timestamp=context.at,
            attack_type=context.attack_type,
        )
