"""Logged water intake. volume is milliliters; entered_volume and volume_unit keep what the user typed."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hydration_tracker.db.base import Base
from hydration_tracker.services.units import VolumeUnit


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IntakeRecord(Base):
    __tablename__ = "intake_records"
    __table_args__ = (
        UniqueConstraint("owner_id", "timestamp_utc", name="uq_intake_records_owner_timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    timestamp_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    # scale: 3 entry decimals plus 10 from the fl oz ratio
    volume: Mapped[Decimal] = mapped_column(Numeric(24, 13), nullable=False)  # milliliters
    entered_volume: Mapped[Decimal] = mapped_column(Numeric(20, 10), nullable=False)
    volume_unit: Mapped[str] = mapped_column(String(16), nullable=False, default=VolumeUnit.ML.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return (
            f"IntakeRecord(id={self.id}, owner_id={self.owner_id!r}, timestamp_utc={self.timestamp_utc}, "
            f"volume={self.volume}, entered_volume={self.entered_volume}, volume_unit={self.volume_unit})"
        )
