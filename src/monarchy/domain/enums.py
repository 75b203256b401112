"""Enumerations used by the combat domain."""

from __future__ import annotations

from enum import StrEnum


class ResultTier(StrEnum):
    """Battle result bands derived from the power ratio."""

    WITH_EASE = "with_ease"
    GOOD_FIGHT = "good_fight"
    FAILED = "failed"


class Side(StrEnum):
    """Participant side in a battle."""

    ATTACKER = "attacker"
    DEFENDER = "defender"


class Era(StrEnum):
    """Kingdom age within a season."""

    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"


class TerrainType(StrEnum):
    """Terrain kinds a battle can be fought on."""

    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAINS = "mountains"
    SWAMP = "swamp"
    DESERT = "desert"
    COASTAL = "coastal"


class FormationType(StrEnum):
    """Canonical formation identifiers."""

    STANDARD = "standard"
    DEFENSIVE_WALL = "defensive_wall"
    CAVALRY_CHARGE = "cavalry_charge"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    FLANKING = "flanking"
    SIEGE = "siege"


class TerritoryKind(StrEnum):
    """Territory classifications relevant to combat."""

    CAPITAL = "capital"
    SETTLEMENT = "settlement"
    OUTPOST = "outpost"
    FORTRESS = "fortress"


class WarStatus(StrEnum):
    """War declaration lifecycle."""

    ACTIVE = "active"
    RESOLVED = "resolved"


class RestorationKind(StrEnum):
    """Why a kingdom entered restoration."""

    DAMAGE_BASED = "damage_based"
    DEATH_BASED = "death_based"


class ErrorCode(StrEnum):
    """Stable error codes surfaced to callers."""

    MISSING_PARAMS = "MISSING_PARAMS"
    INVALID_PARAM = "INVALID_PARAM"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"
    WAR_REQUIRED = "WAR_REQUIRED"
    RESTORATION_ACTIVE = "RESTORATION_ACTIVE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
