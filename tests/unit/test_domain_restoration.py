"""Tests for restoration triggers and windows."""

from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from monarchy.domain.enums import RestorationKind
from monarchy.domain.models import KingdomID
from monarchy.domain.restoration import assess_land_loss, build_restoration, restoration_kind

START = datetime(2026, 5, 1, 8, 0, tzinfo=UTC)


class TestAssessLandLoss:
    def test_small_loss(self):
        """Test that a small loss does not qualify."""
        assessment = assess_land_loss(5000, 367, 1000)
        assert assessment.post_land == 4633
        assert assessment.land_loss_percent == pytest.approx(367 / 5000)
        assert not assessment.floor_reached
        assert restoration_kind(assessment) is None

    def test_floor_reached(self):
        """Test that reaching the floor qualifies."""
        assessment = assess_land_loss(1050, 77, 1000)
        assert assessment.post_land == 1000
        assert assessment.floor_reached
        assert restoration_kind(assessment) == RestorationKind.DEATH_BASED

    def test_defender_already_on_floor(self):
        """Test a defender already on the floor."""
        # Even a failed attack leaves a 1000-acre defender on the floor.
        assessment = assess_land_loss(1000, 0, 1000)
        assert assessment.floor_reached
        assert restoration_kind(assessment) == RestorationKind.DEATH_BASED

    def test_half_the_land_lost(self):
        """Test that losing half the land qualifies."""
        assessment = assess_land_loss(4000, 2000, 1000)
        assert assessment.land_loss_percent == 0.5
        assert not assessment.floor_reached
        assert restoration_kind(assessment) == RestorationKind.DAMAGE_BASED

    def test_zero_land_counts_as_floor(self):
        """Test that zero land is treated as the floor."""
        assessment = assess_land_loss(0, 0, 1000)
        assert assessment.floor_reached
        assert assessment.land_loss_percent == 0.0

    @given(
        land=st.integers(min_value=0, max_value=1_000_000),
        gained=st.integers(min_value=0, max_value=100_000),
    )
    def test_post_land_never_below_floor(self, land, gained):
        """Test that post-battle land never drops below the floor."""
        assessment = assess_land_loss(land, gained, 1000)
        assert assessment.post_land >= 1000
        kind = restoration_kind(assessment)
        expected = assessment.land_loss_percent >= 0.5 or assessment.post_land <= 1000
        assert (kind is not None) == expected
        assert (kind == RestorationKind.DEATH_BASED) == assessment.floor_reached


class TestBuildRestoration:
    def test_death_based_lasts_72_hours(self):
        """Test the death-based window."""
        status = build_restoration(KingdomID("k"), RestorationKind.DEATH_BASED, START)
        assert status.end_time - status.start_time == timedelta(hours=72)

    def test_damage_based_lasts_48_hours(self):
        """Test the damage-based window."""
        status = build_restoration(KingdomID("k"), RestorationKind.DAMAGE_BASED, START)
        assert status.end_time == START + timedelta(hours=48)

    def test_actions(self):
        """Test allowed and prohibited actions."""
        status = build_restoration(KingdomID("k"), RestorationKind.DAMAGE_BASED, START)
        assert set(status.prohibited_actions) == {"attack", "trade", "build", "train"}
        assert set(status.allowed_actions) == {"view", "message", "diplomacy"}
        assert status.prohibits("attack")
        assert not status.prohibits("view")

    def test_active_window(self):
        """Test that the window includes its start and excludes its end."""
        status = build_restoration(KingdomID("k"), RestorationKind.DAMAGE_BASED, START)
        assert status.is_active(START)
        assert status.is_active(START + timedelta(hours=47))
        assert not status.is_active(START + timedelta(hours=48))
        assert not status.is_active(START - timedelta(seconds=1))
