"""Protocol-based interfaces for Monarchy persistence.

The combat service only talks to storage through these protocols, which keeps
it testable with in-memory fakes.
"""

from monarchy.interfaces.stores import (
    BattleReportStore,
    KingdomStore,
    RestorationStore,
    TerritoryStore,
    WarDeclarationStore,
)

__all__ = [
    "BattleReportStore",
    "KingdomStore",
    "RestorationStore",
    "TerritoryStore",
    "WarDeclarationStore",
]
