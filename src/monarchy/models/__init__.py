"""SQLAlchemy models for the Monarchy combat system.

This module exports all database models and the declarative base.
"""

from .base import Base, TimestampCreatedMixin, TimestampMixin, as_utc, new_id, utc_now
from .battle_report import BattleReport
from .kingdom import Kingdom, KingdomEffect, KingdomUnit
from .restoration import RestorationStatus
from .territory import Territory
from .war_declaration import WarDeclaration

__all__ = [
    "Base",
    "BattleReport",
    "Kingdom",
    "KingdomEffect",
    "KingdomUnit",
    "RestorationStatus",
    "Territory",
    "TimestampCreatedMixin",
    "TimestampMixin",
    "WarDeclaration",
    "as_utc",
    "new_id",
    "utc_now",
]
