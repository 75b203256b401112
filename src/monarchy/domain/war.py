"""Repeated-aggression rule."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import BattleReport, KingdomID, WarDeclaration
from .rules_config import DEFAULT_RULES, WarRules


@dataclass(frozen=True, slots=True)
class WarGateDecision:
    prior_attacks: int
    declaration_required: bool
    declaration: WarDeclaration | None

    @property
    def allowed(self) -> bool:
        return not self.declaration_required or self.declaration is not None


def count_prior_attacks(
    reports: Iterable[BattleReport], attacker_id: KingdomID, defender_id: KingdomID
) -> int:
    """Count reports for the ordered pair across the whole history."""

    return sum(
        1
        for report in reports
        if report.attacker_id == attacker_id and report.defender_id == defender_id
    )


def requires_war_declaration(prior_attacks: int, rules: WarRules = DEFAULT_RULES.war) -> bool:
    return prior_attacks >= rules.attacks_before_declaration


def evaluate_war_gate(
    prior_attacks: int,
    declaration: WarDeclaration | None,
    rules: WarRules = DEFAULT_RULES.war,
) -> WarGateDecision:
    required = requires_war_declaration(prior_attacks, rules)
    active = declaration if declaration is not None and declaration.is_active else None
    return WarGateDecision(
        prior_attacks=prior_attacks,
        declaration_required=required,
        declaration=active if required else None,
    )
