"""Territory model for the Monarchy game system."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .kingdom import Kingdom


class Territory(Base, TimestampMixin):
    """A named holding owned by a kingdom.

    Attributes:
        id: Primary key
        owner_kingdom_id: Current owner
        name: Display name
        kind: capital/settlement/outpost/fortress
        terrain_type: Terrain used when an attack names none
        defense_level: Fortification level; the weakest non-capital falls first
    """

    __tablename__ = "territories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_kingdom_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("kingdoms.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[str] = mapped_column(String, nullable=False, default="settlement")
    terrain_type: Mapped[str] = mapped_column(String, nullable=False, default="plains")
    defense_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    owner: Mapped["Kingdom"] = relationship("Kingdom", back_populates="territories")

    __table_args__ = (
        CheckConstraint(
            "kind IN ('capital', 'settlement', 'outpost', 'fortress')",
            name="ck_territories_kind",
        ),
        CheckConstraint("defense_level >= 0", name="ck_territories_defense"),
        Index("idx_territories_owner", "owner_kingdom_id"),
    )

    def __repr__(self) -> str:
        return f"<Territory(id='{self.id}', name='{self.name}', kind='{self.kind}')>"
