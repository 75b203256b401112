"""Persistence adapters for Monarchy."""

from monarchy.repository.sql_store import (
    SqlBattleReportStore,
    SqlKingdomStore,
    SqlRestorationStore,
    SqlStores,
    SqlTerritoryStore,
    SqlWarDeclarationStore,
)

__all__ = [
    "SqlBattleReportStore",
    "SqlKingdomStore",
    "SqlRestorationStore",
    "SqlStores",
    "SqlTerritoryStore",
    "SqlWarDeclarationStore",
]
