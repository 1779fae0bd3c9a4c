"""
Intake record service: owner-scoped create / get / update / list / delete.

Functions take the request's AsyncSession and flush, but never commit: the caller owns the
transaction, so the duplicate check and the write that follows it land in one unit of work.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hydration_tracker.config import Settings, settings as default_settings
from hydration_tracker.core.exceptions import (
    DuplicateTimestampError,
    InvalidFilterError,
    RecordNotFoundError,
    StoreError,
)
from hydration_tracker.core.timeutils import as_utc
from hydration_tracker.models.intake_record import IntakeRecord
from hydration_tracker.services.duplicate_guard import has_conflict
from hydration_tracker.services.intake_filter import FilterCriteria, validate_filter
from hydration_tracker.services.pagination import Page
from hydration_tracker.services.units import VolumeUnit, normalize_quantity, parse_unit, to_milliliters

logger = logging.getLogger(__name__)

UNIQUE_CONSTRAINT_NAME = "uq_intake_records_owner_timestamp"

_SORT_COLUMNS = {
    "timestamp_utc": IntakeRecord.timestamp_utc,
    "volume": IntakeRecord.volume,
    "created_at": IntakeRecord.created_at,
    "updated_at": IntakeRecord.updated_at,
}


@dataclass
class IntakeDraft:
    """Field values for a create or a full update, in the unit the user entered."""

    timestamp_utc: datetime
    volume: Decimal
    volume_unit: str = VolumeUnit.ML.value


@dataclass(frozen=True)
class Found:
    record: IntakeRecord


@dataclass(frozen=True)
class Missing:
    record_id: int


OwnedLookup = Found | Missing


def _is_owner_timestamp_violation(exc: IntegrityError) -> bool:
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    # PostgreSQL names the constraint; SQLite lists the columns
    return UNIQUE_CONSTRAINT_NAME in msg or ("owner_id" in msg and "timestamp_utc" in msg)


@contextmanager
def _store_call(operation: str):
    """Translate database failures: owner/timestamp unique violations become DuplicateTimestampError, the rest StoreError."""
    try:
        yield
    except IntegrityError as e:
        if _is_owner_timestamp_violation(e):
            logger.warning("Intake %s rejected by unique constraint %s", operation, UNIQUE_CONSTRAINT_NAME)
            raise DuplicateTimestampError() from e
        raise StoreError(f"Integrity error during intake {operation}", operation=operation) from e
    except SQLAlchemyError as e:
        raise StoreError(f"Database error during intake {operation}", operation=operation) from e


async def fetch_owned(session: AsyncSession, owner_id: str, record_id: int) -> OwnedLookup:
    """Look up a record by id within the owner's records. Foreign and absent ids both yield Missing."""
    with _store_call("lookup"):
        r = await session.execute(
            select(IntakeRecord).where(IntakeRecord.id == record_id, IntakeRecord.owner_id == owner_id)
        )
        row = r.scalar_one_or_none()
    if row is None:
        return Missing(record_id)
    return Found(row)


def _require(lookup: OwnedLookup) -> IntakeRecord:
    if isinstance(lookup, Missing):
        raise RecordNotFoundError(lookup.record_id)
    return lookup.record


async def create_intake(session: AsyncSession, owner_id: str, draft: IntakeDraft) -> IntakeRecord:
    unit = parse_unit(draft.volume_unit, VolumeUnit)
    volume_ml = to_milliliters(draft.volume, unit)
    timestamp = as_utc(draft.timestamp_utc)
    with _store_call("create"):
        if await has_conflict(session, owner_id, timestamp):
            logger.warning("Duplicate intake timestamp %s for owner %s", timestamp.isoformat(), owner_id)
            raise DuplicateTimestampError()
        record = IntakeRecord(
            owner_id=owner_id,
            timestamp_utc=timestamp,
            volume=volume_ml,
            entered_volume=normalize_quantity(draft.volume),
            volume_unit=unit.value,
        )
        session.add(record)
        await session.flush()
    logger.info("Created intake %s for owner %s (%s ml)", record.id, owner_id, volume_ml)
    return record


async def get_intake(session: AsyncSession, owner_id: str, record_id: int) -> IntakeRecord:
    return _require(await fetch_owned(session, owner_id, record_id))


async def update_intake(
    session: AsyncSession,
    owner_id: str,
    record_id: int,
    draft: IntakeDraft,
) -> IntakeRecord:
    """Replace timestamp and volume of an owned record; it may keep its own timestamp."""
    record = _require(await fetch_owned(session, owner_id, record_id))
    unit = parse_unit(draft.volume_unit, VolumeUnit)
    volume_ml = to_milliliters(draft.volume, unit)
    timestamp = as_utc(draft.timestamp_utc)
    with _store_call("update"):
        # check before touching the row, otherwise autoflush would write the new timestamp first
        if await has_conflict(session, owner_id, timestamp, exclude_id=record.id):
            logger.warning("Duplicate intake timestamp %s for owner %s", timestamp.isoformat(), owner_id)
            raise DuplicateTimestampError()
        record.timestamp_utc = timestamp
        record.volume = volume_ml
        record.entered_volume = normalize_quantity(draft.volume)
        record.volume_unit = unit.value
        await session.flush()
    logger.info("Updated intake %s for owner %s", record.id, owner_id)
    return record


async def delete_intake(session: AsyncSession, owner_id: str, record_id: int) -> None:
    record = _require(await fetch_owned(session, owner_id, record_id))
    with _store_call("delete"):
        await session.delete(record)
        await session.flush()
    logger.info("Deleted intake %s for owner %s", record_id, owner_id)


async def list_intakes(
    session: AsyncSession,
    owner_id: str,
    criteria: FilterCriteria,
    settings: Settings | None = None,
) -> Page[IntakeRecord]:
    """
    Validate `criteria`, then return one page of the owner's matching records.
    Partial bounds apply on their own (start only, max volume only, ...). Raises
    InvalidFilterError with every violation and without querying the store.
    """
    cfg = settings or default_settings
    validation = validate_filter(criteria, cfg)
    if not validation.is_valid:
        raise InvalidFilterError(validation.errors)

    size = criteria.size or cfg.default_page_size
    conditions = [IntakeRecord.owner_id == owner_id]
    if criteria.start_utc is not None:
        conditions.append(IntakeRecord.timestamp_utc >= as_utc(criteria.start_utc))
    if criteria.end_utc is not None:
        conditions.append(IntakeRecord.timestamp_utc <= as_utc(criteria.end_utc))
    if criteria.min_volume is not None:
        conditions.append(IntakeRecord.volume >= criteria.min_volume)
    if criteria.max_volume is not None:
        conditions.append(IntakeRecord.volume <= criteria.max_volume)
    if criteria.volume_unit is not None:
        conditions.append(IntakeRecord.volume_unit == parse_unit(criteria.volume_unit, VolumeUnit).value)

    sort_col = _SORT_COLUMNS[criteria.sort_field]
    order = sort_col.desc() if criteria.sort_direction.upper() == "DESC" else sort_col.asc()

    page = Page(content=[], total_elements=0, page_number=criteria.page, page_size=size)
    base = select(IntakeRecord).where(*conditions)
    with _store_call("list"):
        count_q = select(func.count()).select_from(base.subquery())
        page.total_elements = (await session.execute(count_q)).scalar() or 0
        r = await session.execute(base.order_by(order, IntakeRecord.id.asc()).offset(page.offset).limit(size))
        page.content = list(r.scalars().all())
    return page
