"""Tests for API request/response schemas."""

import pytest
from pydantic import ValidationError

from monarchy.domain.enums import ErrorCode, ResultTier
from monarchy.schemas import AttackRequestIn, CombatErrorOut, CombatResultOut


class TestAttackRequestIn:
    def test_defaults(self):
        """Test request defaults."""
        payload = AttackRequestIn(attacker_id="a", defender_id="b", units={"cavalry": 10})
        assert payload.attack_type == "standard"
        assert payload.formation_id is None
        assert payload.seed is None

    def test_missing_fields_are_accepted_for_service_validation(self):
        """Test that missing fields pass through to the service."""
        payload = AttackRequestIn()
        request = payload.to_domain()
        assert request.attacker_id is None
        assert request.units is None

    def test_to_domain(self):
        """Test conversion to the domain request."""
        payload = AttackRequestIn(
            attacker_id="a",
            defender_id="b",
            units={"cavalry": 10},
            formation_id="cavalry-charge",
            terrain_id="Forest",
            attack_type="raid",
            seed="replay",
        )
        request = payload.to_domain()
        assert request.units == {"cavalry": 10}
        assert request.formation_id == "cavalry-charge"
        assert request.terrain_id == "Forest"
        assert request.attack_type == "raid"
        assert request.seed == "replay"


class TestResponses:
    def test_result(self):
        """Test the result schema."""
        out = CombatResultOut(
            result_tier=ResultTier.WITH_EASE,
            power_ratio=1250.0,
            casualties={"attacker": {"cavalry": 250}, "defender": {"infantry": 2}},
            land_gained=367,
            gold_looted=367_000,
            message="ok",
            attack_succeeded=True,
        )
        data = out.model_dump(mode="json")
        assert data["success"] is True
        assert data["result_tier"] == "with_ease"
        assert data["casualties"]["attacker"] == {"cavalry": 250}

    def test_result_rejects_negative_land(self):
        """Test that negative land is rejected."""
        with pytest.raises(ValidationError):
            CombatResultOut(
                result_tier=ResultTier.FAILED,
                power_ratio=0.5,
                casualties={},
                land_gained=-1,
                gold_looted=0,
                message="",
                attack_succeeded=False,
            )

    def test_error(self):
        """Test the error schema."""
        data = CombatErrorOut(error_code=ErrorCode.WAR_REQUIRED, error="nope").model_dump(
            mode="json"
        )
        assert data == {"success": False, "error_code": "WAR_REQUIRED", "error": "nope"}
