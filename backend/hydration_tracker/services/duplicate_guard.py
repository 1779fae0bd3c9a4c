"""Per-owner timestamp uniqueness check, run in the caller's transaction right before a write."""

from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from hydration_tracker.core.timeutils import as_utc
from hydration_tracker.models.intake_record import IntakeRecord


async def has_conflict(
    session: AsyncSession,
    owner_id: str,
    timestamp_utc: datetime,
    exclude_id: int | None = None,
) -> bool:
    """
    True if `owner_id` already has a record at exactly `timestamp_utc`, other than `exclude_id`.
    Pass the record's own id as `exclude_id` on update so it may keep its timestamp.
    The unique constraint on (owner_id, timestamp_utc) still backs this up against concurrent writers.
    """
    conditions = [
        IntakeRecord.owner_id == owner_id,
        IntakeRecord.timestamp_utc == as_utc(timestamp_utc),
    ]
    if exclude_id is not None:
        conditions.append(IntakeRecord.id != exclude_id)
    r = await session.execute(select(exists().where(*conditions)))
    return bool(r.scalar())
