"""Tests for power calculation and effective unit counts."""

import pytest

from monarchy.domain.modifiers import NEUTRAL_MODIFIERS, ModifierSet
from monarchy.domain.power import (
    CAVALRY,
    INFANTRY,
    SIEGE,
    ClassDeltas,
    calculate_power,
    effective_attacker_units,
    effective_defender_units,
    scale_units,
    terrain_ratio,
    unit_class,
)
from monarchy.domain.tables import ModifierTables, UnitStats


class TestUnitClass:
    @pytest.mark.parametrize(
        ("unit_type", "expected"),
        [
            ("cavalry", CAVALRY),
            ("heavy_cavalry", CAVALRY),
            ("siege_engine", SIEGE),
            ("infantry", INFANTRY),
            ("foot_soldier", INFANTRY),
            ("militia", INFANTRY),
            ("knight", INFANTRY),
            ("archer", None),
            ("mage", None),
        ],
    )
    def test_keywords(self, unit_type, expected):
        """Test unit class detection from unit type keywords."""
        assert unit_class(unit_type) == expected


class TestCalculatePower:
    def test_attack_and_defense(self):
        """Test attack and defense power from the stat table."""
        units = {"cavalry": 5000}
        assert calculate_power(units, "attack") == 25000
        assert calculate_power({"infantry": 10}, "defense") == 20

    def test_unknown_unit_uses_default_stats(self):
        """Test that unknown unit types use the default stats."""
        assert calculate_power({"spearman": 10}, "attack") == 20

    def test_empty_map(self):
        """Test that no units means no power."""
        assert calculate_power({}, "attack") == 0

    def test_class_deltas(self):
        """Test per-class terrain deltas on power."""
        units = {"cavalry": 10, "infantry": 10}
        power = calculate_power(units, "attack", class_deltas=ClassDeltas(cavalry=-0.1))
        assert power == pytest.approx(10 * 5 * 0.9 + 10 * 3)

    def test_injected_stats(self):
        """Test power from an injected stat table."""
        tables = ModifierTables(unit_stats={"golem": UnitStats(10, 10)})
        assert calculate_power({"golem": 3}, "attack", tables=tables) == 30


def test_scale_units_floors_without_float_drift():
    """Test that unit scaling floors without float drift."""
    assert scale_units({"infantry": 100}, 1.15) == {"infantry": 115}
    assert scale_units({"infantry": 7}, 0.5) == {"infantry": 3}


class TestEffectiveUnits:
    def test_neutral_modifiers_keep_counts(self):
        """Test that neutral modifiers leave counts unchanged."""
        units = {"cavalry": 5000}
        assert effective_attacker_units(units, NEUTRAL_MODIFIERS) == units
        assert effective_defender_units({"infantry": 10}, NEUTRAL_MODIFIERS) == {"infantry": 10}

    def test_formation_then_terrain(self):
        """Test that formation applies before terrain."""
        modifiers = ModifierSet(formation_offense=0.3, terrain_cavalry=-0.1)
        # 100 -> 130 (charge) -> 117 (forest hinders cavalry)
        assert effective_attacker_units({"cavalry": 100}, modifiers) == {"cavalry": 117}

    def test_attacker_modifier_chain(self):
        """Test the full attacker modifier order."""
        modifiers = ModifierSet(
            formation_offense=0.1,
            age_bonus=1.05,
            race_offense_bonus=1.10,
            buff_bonus=1.20,
        )
        # 100 -> 110 -> 115 -> 126 -> 151
        assert effective_attacker_units({"infantry": 100}, modifiers) == {"infantry": 151}

    def test_defender_race_then_terrain(self):
        """Test that defender race applies before terrain."""
        modifiers = ModifierSet(race_defense_bonus=1.10, terrain_defense=0.2)
        # 100 -> 110 -> 132
        assert effective_defender_units({"infantry": 100}, modifiers) == {"infantry": 132}

    def test_terrain_ratio_without_units(self):
        """Test the terrain ratio of an empty army."""
        assert terrain_ratio({}, ModifierSet(terrain_offense=-0.15)) == 1.0

    def test_terrain_ratio_mixed_army(self):
        """Test the terrain ratio of a mixed army."""
        modifiers = ModifierSet(terrain_cavalry=0.15, terrain_infantry=-0.1)
        units = {"cavalry": 10, "infantry": 10}
        raw = 10 * 5 + 10 * 3
        adjusted = 10 * 5 * 1.15 + 10 * 3 * 0.9
        assert terrain_ratio(units, modifiers) == pytest.approx(adjusted / raw)
