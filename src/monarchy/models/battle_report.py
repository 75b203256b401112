"""Battle report model: one immutable row per resolved attack."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampCreatedMixin, new_id


class BattleReport(Base, TimestampCreatedMixin):
    """Record of one attack.

    Attributes:
        id: Primary key
        attacker_id: Attacking kingdom
        defender_id: Defending kingdom
        attack_type: Free-form label supplied with the request
        result_tier: with_ease/good_fight/failed
        power_ratio: Attacker power over defender power
        casualties: JSON ``{"attacker": {...}, "defender": {...}}``
        land_gained: Acres taken
        gold_looted: Gold taken
        timestamp: When the battle was resolved
    """

    __tablename__ = "battle_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    attacker_id: Mapped[str] = mapped_column(String(36), ForeignKey("kingdoms.id"), nullable=False)
    defender_id: Mapped[str] = mapped_column(String(36), ForeignKey("kingdoms.id"), nullable=False)
    attack_type: Mapped[str] = mapped_column(String, nullable=False, default="standard")
    result_tier: Mapped[str] = mapped_column(String, nullable=False)
    power_ratio: Mapped[float] = mapped_column(Float, nullable=False)
    casualties: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    land_gained: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gold_looted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timestamp: Mapped[datetime] = mapped_column(nullable=False)

    __table_args__ = (
        CheckConstraint(
            "result_tier IN ('with_ease', 'good_fight', 'failed')",
            name="ck_battle_reports_tier",
        ),
        CheckConstraint("land_gained >= 0", name="ck_battle_reports_land"),
        CheckConstraint("gold_looted >= 0", name="ck_battle_reports_gold"),
        Index("idx_battle_reports_pair", "attacker_id", "defender_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<BattleReport(id='{self.id}', attacker='{self.attacker_id}', "
            f"defender='{self.defender_id}', tier='{self.result_tier}')>"
        )
