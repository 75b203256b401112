"""Restoration status model."""

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampCreatedMixin, new_id


class RestorationStatus(Base, TimestampCreatedMixin):
    """Recovery period for a heavily damaged kingdom.

    Rows are never deleted; a status is active while
    ``start_time <= now < end_time``.
    """

    __tablename__ = "restoration_statuses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    kingdom_id: Mapped[str] = mapped_column(String(36), ForeignKey("kingdoms.id"), nullable=False)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    start_time: Mapped[datetime] = mapped_column(nullable=False)
    end_time: Mapped[datetime] = mapped_column(nullable=False)
    allowed_actions: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    prohibited_actions: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "kind IN ('damage_based', 'death_based')", name="ck_restoration_statuses_kind"
        ),
        Index("idx_restoration_statuses_kingdom", "kingdom_id", "end_time"),
    )

    def __repr__(self) -> str:
        return f"<RestorationStatus(kingdom='{self.kingdom_id}', kind='{self.kind}', ends={self.end_time})>"
