"""Pydantic request/response schemas for the combat API."""

from .combat import (
    AttackRequestIn,
    CasualtiesOut,
    CombatErrorOut,
    CombatPreviewOut,
    CombatResultOut,
)

__all__ = [
    "AttackRequestIn",
    "CasualtiesOut",
    "CombatErrorOut",
    "CombatPreviewOut",
    "CombatResultOut",
]
