"""Service Factory for Monarchy.

Wires services to their SQL-backed stores.  For testing, construct
``CombatService`` with protocol-based fakes instead.

Example:
    from monarchy.factory import create_combat_service
    combat = create_combat_service(session)
"""

from collections.abc import Callable

from sqlalchemy.orm import Session

from monarchy.domain.rules_config import DEFAULT_RULES, RulesConfig
from monarchy.repository.sql_store import SqlStores
from monarchy.services.combat_service import CombatService


def create_combat_service(
    session: Session,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: Callable[[], float] | None = None,
) -> CombatService:
    """Create a CombatService bound to one database session.

    Args:
        session: Database session
        rules: Rule constants to resolve with
        rng: Optional source for the land-gain draw; defaults to ``random.random``

    Returns:
        Fully initialized CombatService
    """
    stores = SqlStores.from_session(session)
    extra = {"rng": rng} if rng is not None else {}
    return CombatService(
        stores.kingdoms,
        stores.territories,
        stores.battle_reports,
        stores.war_declarations,
        stores.restorations,
        rules=rules,
        **extra,
    )
