"""War Gate Service for Monarchy.

Looks up battle history and war declarations for an ordered attacker/defender
pair and applies the repeated-aggression rule from :mod:`monarchy.domain.war`.
"""

import logging

from monarchy.domain.models import KingdomID
from monarchy.domain.rules_config import DEFAULT_RULES, WarRules
from monarchy.domain.war import WarGateDecision, count_prior_attacks, evaluate_war_gate
from monarchy.interfaces.stores import BattleReportStore, WarDeclarationStore

logger = logging.getLogger(__name__)


class WarGateService:
    """Effectful side of the War Gate."""

    def __init__(
        self,
        battle_reports: BattleReportStore,
        war_declarations: WarDeclarationStore,
        rules: WarRules = DEFAULT_RULES.war,
    ):
        self.battle_reports = battle_reports
        self.war_declarations = war_declarations
        self.rules = rules

    def evaluate(self, attacker_id: KingdomID, defender_id: KingdomID) -> WarGateDecision:
        """Decide whether the attack may proceed without mutating anything.

        Args:
            attacker_id: Attacking kingdom
            defender_id: Defending kingdom

        Returns:
            WarGateDecision; ``allowed`` is False when a declaration is required
            but none is active
        """
        reports = self.battle_reports.list_by_attacker_defender_pair(attacker_id, defender_id)
        prior = count_prior_attacks(reports, attacker_id, defender_id)
        declaration = None
        if prior >= self.rules.attacks_before_declaration:
            declaration = self.war_declarations.find_active(attacker_id, defender_id)
        decision = evaluate_war_gate(prior, declaration, self.rules)
        if decision.declaration_required:
            logger.info(
                "war_gate attacker=%s defender=%s prior_attacks=%d allowed=%s",
                attacker_id,
                defender_id,
                prior,
                decision.allowed,
            )
        return decision

    def record_attack(self, decision: WarGateDecision) -> None:
        """Count an admitted attack against its war declaration, if one applied."""
        if decision.declaration is not None:
            self.war_declarations.increment_attack_count(decision.declaration.id)
