"""War declaration model."""

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, new_id


class WarDeclaration(Base, TimestampMixin):
    """Declared war from one kingdom on another.

    Required once an attacker has hit the same defender three times.

    Attributes:
        id: Primary key
        attacker_id: Declaring kingdom
        defender_id: Target kingdom
        status: active/resolved
        attack_count: Attacks made under this declaration
        reason: Optional casus belli
        declared_at: When the war was declared
    """

    __tablename__ = "war_declarations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    attacker_id: Mapped[str] = mapped_column(String(36), ForeignKey("kingdoms.id"), nullable=False)
    defender_id: Mapped[str] = mapped_column(String(36), ForeignKey("kingdoms.id"), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    attack_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reason: Mapped[str | None] = mapped_column(String, nullable=True)
    declared_at: Mapped[datetime] = mapped_column(nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'resolved')", name="ck_war_declarations_status"),
        CheckConstraint("attack_count >= 0", name="ck_war_declarations_attacks"),
        Index("idx_war_declarations_pair", "attacker_id", "defender_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<WarDeclaration(id='{self.id}', status='{self.status}', attacks={self.attack_count})>"
