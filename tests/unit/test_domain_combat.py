"""Tests for the side-effect free battle pipeline."""

from hypothesis import given
from hypothesis import strategies as st

from monarchy.domain.combat import simulate_battle
from monarchy.domain.enums import ResultTier
from monarchy.domain.modifiers import ModifierResolver, ModifierSet


class TestSimulateBattle:
    def test_overwhelming_cavalry(self):
        """Test the 5000 cavalry against 10 infantry reference battle."""
        outcome = simulate_battle({"cavalry": 5000}, {"infantry": 10}, 5000, random_factor=0.5)

        assert outcome.attacker_power == 25000
        assert outcome.defender_power == 20
        assert outcome.power_ratio == 1250
        assert outcome.result_tier == ResultTier.WITH_EASE
        assert outcome.success
        assert outcome.attacker_casualties == {"cavalry": 250}
        assert outcome.defender_casualties == {"infantry": 2}
        assert outcome.land_gained == 367
        assert outcome.gold_looted == 367_000

    def test_overwhelming_cavalry_land_band(self):
        """Test that land gain stays inside the variance band across draws."""
        low = simulate_battle({"cavalry": 5000}, {"infantry": 10}, 5000, random_factor=0.0)
        high = simulate_battle({"cavalry": 5000}, {"infantry": 10}, 5000, random_factor=0.99)
        assert 352 <= low.land_gained <= high.land_gained <= 382

    def test_equal_forces_fail(self):
        """Test that evenly matched armies produce a failed attack."""
        outcome = simulate_battle({"peasant": 100}, {"peasant": 100}, 5000, random_factor=0.7)

        assert outcome.power_ratio == 1.0
        assert outcome.result_tier == ResultTier.FAILED
        assert not outcome.success
        assert outcome.land_gained == 0
        assert outcome.gold_looted == 0
        assert outcome.attacker_casualties == {"peasant": 25}
        assert outcome.defender_casualties == {"peasant": 5}

    def test_undefended_kingdom(self):
        """Test an attack on a kingdom with no defenders."""
        outcome = simulate_battle({"infantry": 1}, {}, 2000, random_factor=0.5)
        assert outcome.defender_power == 0
        assert outcome.power_ratio == 3
        assert outcome.result_tier == ResultTier.WITH_EASE
        assert outcome.defender_casualties == {}

    def test_casualties_use_real_counts(self):
        """Test that casualties come from committed counts, not modified ones."""
        modifiers = ModifierSet(formation_offense=0.3)
        outcome = simulate_battle(
            {"cavalry": 100}, {"infantry": 10}, 5000, modifiers=modifiers, random_factor=0.5
        )
        assert outcome.effective_attacker_units == {"cavalry": 130}
        assert outcome.attacker_casualties == {"cavalry": 5}

    def test_forest_defense_turns_the_fight(self):
        """Test that forest terrain can change the result tier."""
        attacker = {"infantry": 100}
        defender = {"infantry": 125}
        plains = simulate_battle(attacker, defender, 5000, random_factor=0.5)
        forest = simulate_battle(
            attacker,
            defender,
            5000,
            modifiers=ModifierResolver().resolve(terrain_id="forest"),
            random_factor=0.5,
        )
        # 300 vs 250 on plains, 300 vs 300 once the forest adds 20% defenders
        assert plains.result_tier == ResultTier.GOOD_FIGHT
        assert forest.result_tier == ResultTier.FAILED

    def test_casualty_mapping(self):
        """Test the attacker/defender casualty mapping on the outcome."""
        outcome = simulate_battle({"cavalry": 5000}, {"infantry": 10}, 5000)
        assert outcome.casualties == {"attacker": {"cavalry": 250}, "defender": {"infantry": 2}}
        assert "with_ease" in outcome.summary()

    @given(
        attacker=st.dictionaries(
            st.sampled_from(["cavalry", "infantry", "archer"]),
            st.integers(min_value=0, max_value=100_000),
            max_size=3,
        ),
        defender=st.dictionaries(
            st.sampled_from(["infantry", "militia", "knight"]),
            st.integers(min_value=0, max_value=100_000),
            max_size=3,
        ),
        land=st.integers(min_value=1000, max_value=1_000_000),
        draw=st.floats(min_value=0.0, max_value=1.0, exclude_max=True),
    )
    def test_pipeline_is_deterministic(self, attacker, defender, land, draw):
        """Test that identical inputs give identical outcomes."""
        first = simulate_battle(attacker, defender, land, random_factor=draw)
        second = simulate_battle(attacker, defender, land, random_factor=draw)
        assert first == second
        assert (first.land_gained == 0) == (first.result_tier == ResultTier.FAILED)
        for unit_type, lost in first.attacker_casualties.items():
            assert 0 <= lost <= attacker[unit_type]
        for unit_type, lost in first.defender_casualties.items():
            assert 0 <= lost <= defender[unit_type]
