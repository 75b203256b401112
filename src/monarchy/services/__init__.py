"""Service layer for Monarchy combat.

Services depend only on the store protocols in ``monarchy.interfaces``:

- CombatService: validation, restoration guard, War Gate, battle resolution
- WarGateService: repeated-aggression check and war attack counting
- PostCombatUpdater: casualties, land/gold/territory transfer, restoration

Production Usage:
    from monarchy.factory import create_combat_service
    combat = create_combat_service(session)
    result = combat.resolve_combat(request)

Testing Usage:
    Construct CombatService directly with in-memory fakes for each store.
"""

from monarchy.services.combat_service import (
    CombatPreview,
    CombatRejected,
    CombatResolved,
    CombatResult,
    CombatService,
)
from monarchy.services.post_combat import PostCombatReport, PostCombatUpdater
from monarchy.services.war_gate import WarGateService

__all__ = [
    "CombatPreview",
    "CombatRejected",
    "CombatResolved",
    "CombatResult",
    "CombatService",
    "PostCombatReport",
    "PostCombatUpdater",
    "WarGateService",
]
