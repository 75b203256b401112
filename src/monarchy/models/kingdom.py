"""Kingdom models for the Monarchy game system.

A kingdom owns resources, units, and temporary effects.  Units and effects
live in their own tables so that every count can be updated with a single
atomic statement instead of rewriting a JSON blob.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .territory import Territory


class Kingdom(Base, TimestampMixin):
    """Represents a player kingdom.

    Attributes:
        id: Primary key (string id)
        owner_id: Id of the owning player
        name: Display name
        race: Race key used for war offense/defense multipliers
        era: Current age (early/middle/late)
        gold: Spendable gold (>= 0)
        population: Population (>= 0)
        mana: Mana (>= 0)
        land: Acres held (>= 1000)
        turns_balance: Action turns available (>= 0)
    """

    __tablename__ = "kingdoms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    race: Mapped[str] = mapped_column(String, nullable=False)
    era: Mapped[str] = mapped_column(String, nullable=False, default="early")

    gold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    population: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mana: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    land: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)
    turns_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    units: Mapped[list["KingdomUnit"]] = relationship(
        "KingdomUnit", back_populates="kingdom", cascade="all, delete-orphan"
    )
    effects: Mapped[list["KingdomEffect"]] = relationship(
        "KingdomEffect", back_populates="kingdom", cascade="all, delete-orphan"
    )
    territories: Mapped[list["Territory"]] = relationship(
        "Territory", back_populates="owner"
    )

    __table_args__ = (
        CheckConstraint("era IN ('early', 'middle', 'late')", name="ck_kingdoms_era"),
        CheckConstraint("gold >= 0", name="ck_kingdoms_gold"),
        CheckConstraint("population >= 0", name="ck_kingdoms_population"),
        CheckConstraint("mana >= 0", name="ck_kingdoms_mana"),
        CheckConstraint("land >= 1000", name="ck_kingdoms_land_floor"),
        CheckConstraint("turns_balance >= 0", name="ck_kingdoms_turns"),
        Index("idx_kingdoms_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Kingdom(id='{self.id}', name='{self.name}', land={self.land})>"


class KingdomUnit(Base):
    """Count of one unit type held by a kingdom."""

    __tablename__ = "kingdom_units"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kingdom_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("kingdoms.id", ondelete="CASCADE"), nullable=False
    )
    unit_type: Mapped[str] = mapped_column(String, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    kingdom: Mapped["Kingdom"] = relationship("Kingdom", back_populates="units")

    __table_args__ = (
        UniqueConstraint("kingdom_id", "unit_type", name="uq_kingdom_units_type"),
        CheckConstraint("count >= 0", name="ck_kingdom_units_count"),
    )

    def __repr__(self) -> str:
        return f"<KingdomUnit(kingdom='{self.kingdom_id}', {self.unit_type}={self.count})>"


class KingdomEffect(Base):
    """Temporary effect (spell, faith focus) active on a kingdom."""

    __tablename__ = "kingdom_effects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kingdom_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("kingdoms.id", ondelete="CASCADE"), nullable=False
    )
    effect_type: Mapped[str] = mapped_column(String, nullable=False)
    magnitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)

    kingdom: Mapped["Kingdom"] = relationship("Kingdom", back_populates="effects")

    __table_args__ = (Index("idx_kingdom_effects_lookup", "kingdom_id", "effect_type"),)
