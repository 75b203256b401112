"""Tests for modifier resolution and id normalisation."""

from datetime import UTC, datetime, timedelta

import pytest

from monarchy.domain.enums import Era, FormationType, TerrainType
from monarchy.domain.models import COMBAT_FOCUS, ActiveEffect
from monarchy.domain.modifiers import (
    NEUTRAL_MODIFIERS,
    ModifierResolver,
    normalize_era,
    normalize_formation,
    normalize_terrain,
)
from monarchy.domain.tables import ModifierTables, RaceModifiers

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


class TestNormalizeFormation:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("defensive_wall", FormationType.DEFENSIVE_WALL),
            ("DEFENSIVE_WALL", FormationType.DEFENSIVE_WALL),
            ("defensive-wall", FormationType.DEFENSIVE_WALL),
            ("Defensive Wall", FormationType.DEFENSIVE_WALL),
            ("cavalry-charge", FormationType.CAVALRY_CHARGE),
            ("Balanced Formation", FormationType.BALANCED),
            ("  aggressive ", FormationType.AGGRESSIVE),
        ],
    )
    def test_aliases_collapse_to_one_type(self, raw, expected):
        """Test that every formation alias maps to its type."""
        assert normalize_formation(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "phalanx"])
    def test_unknown_or_missing(self, raw):
        """Test that unknown or empty formations resolve to None."""
        assert normalize_formation(raw) is None


class TestNormalizeTerrain:
    def test_case_insensitive(self):
        """Test that terrain lookup ignores case and whitespace."""
        assert normalize_terrain("Forest") == TerrainType.FOREST
        assert normalize_terrain("MOUNTAINS") == TerrainType.MOUNTAINS

    @pytest.mark.parametrize("raw", [None, "", "tundra"])
    def test_unknown_defaults_to_plains(self, raw):
        """Test that unknown terrain is plains."""
        assert normalize_terrain(raw) == TerrainType.PLAINS


def test_normalize_era():
    """Test era normalisation."""
    assert normalize_era("Late") == Era.LATE
    assert normalize_era("bronze") is None
    assert normalize_era(None) is None


class TestModifierResolver:
    def setup_method(self):
        self.resolver = ModifierResolver()

    def test_no_context_is_neutral(self):
        """Test that an empty context yields neutral modifiers."""
        assert self.resolver.resolve() == NEUTRAL_MODIFIERS

    def test_unknown_keys_are_neutral(self):
        """Test that unknown formation, terrain, race and era ids are neutral."""
        modifiers = self.resolver.resolve(
            formation_id="phalanx",
            terrain_id="tundra",
            attacker_race="lizardfolk",
            defender_race="",
            attacker_era="bronze",
        )
        assert modifiers == NEUTRAL_MODIFIERS

    def test_forest_terrain(self):
        """Test the forest terrain deltas."""
        modifiers = self.resolver.resolve(terrain_id="forest")
        assert modifiers.terrain_defense == pytest.approx(0.2)
        assert modifiers.terrain_cavalry == pytest.approx(-0.1)
        assert modifiers.terrain_offense == 0.0

    def test_formation_offense(self):
        """Test the formation offense bonus."""
        assert self.resolver.formation_offense("cavalry-charge") == pytest.approx(0.3)
        assert self.resolver.formation_offense("Defensive Wall") == pytest.approx(-0.1)
        assert self.resolver.formation_offense(None) == 0.0

    def test_era_schedule(self):
        """Test the era multiplier schedule."""
        assert self.resolver.age_bonus("early") == 1.0
        assert self.resolver.age_bonus("middle") == pytest.approx(1.05)
        assert self.resolver.age_bonus("late") == pytest.approx(1.10)

    def test_race_bonuses(self):
        """Test race offense and defense multipliers."""
        modifiers = self.resolver.resolve(attacker_race="Droben", defender_race="dwarven")
        assert modifiers.race_offense_bonus == pytest.approx(1.10)
        assert modifiers.race_defense_bonus == pytest.approx(1.10)

    def test_human_is_neutral(self):
        """Test that humans get no race bonus."""
        modifiers = self.resolver.resolve(attacker_race="human", defender_race="human")
        assert modifiers.race_offense_bonus == 1.0
        assert modifiers.race_defense_bonus == 1.0

    def test_active_combat_focus(self):
        """Test that an active combat focus applies."""
        effects = [ActiveEffect(COMBAT_FOCUS, NOW + timedelta(hours=1))]
        modifiers = self.resolver.resolve(attacker_effects=effects, at=NOW)
        assert modifiers.buff_bonus == pytest.approx(1.20)

    def test_expired_combat_focus(self):
        """Test that an expired combat focus is ignored."""
        effects = [ActiveEffect(COMBAT_FOCUS, NOW - timedelta(seconds=1))]
        assert self.resolver.buff_bonus(effects, NOW) == 1.0

    def test_other_effects_ignored(self):
        """Test that unrelated effects do not buff combat."""
        effects = [ActiveEffect("harvest_blessing", NOW + timedelta(hours=1))]
        assert self.resolver.buff_bonus(effects, NOW) == 1.0

    def test_buff_needs_evaluation_time(self):
        """Test that buffs need an evaluation time."""
        effects = [ActiveEffect(COMBAT_FOCUS, NOW + timedelta(hours=1))]
        assert self.resolver.buff_bonus(effects, None) == 1.0

    def test_injected_tables(self):
        """Test resolution against injected tables."""
        tables = ModifierTables(races={"orc": RaceModifiers(offense=1.5, defense=0.5)})
        resolver = ModifierResolver(tables)
        modifiers = resolver.resolve(attacker_race="orc", defender_race="orc")
        assert modifiers.race_offense_bonus == 1.5
        assert modifiers.race_defense_bonus == 0.5
        # Races missing from the injected table fall back to neutral.
        assert resolver.resolve(attacker_race="human").race_offense_bonus == 1.0
