"""Tests for the per-owner timestamp conflict check."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hydration_tracker.models.intake_record import IntakeRecord
from hydration_tracker.services.duplicate_guard import has_conflict

T0 = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


async def _add(session, owner_id: str, ts: datetime) -> IntakeRecord:
    row = IntakeRecord(
        owner_id=owner_id, timestamp_utc=ts, volume=Decimal("250"), entered_volume=Decimal("250"), volume_unit="ML"
    )
    session.add(row)
    await session.commit()
    return row


@pytest.mark.asyncio
async def test_no_records_no_conflict(db_session):
    assert await has_conflict(db_session, "u1", T0) is False


@pytest.mark.asyncio
async def test_same_owner_same_instant_conflicts(db_session):
    await _add(db_session, "u1", T0)
    assert await has_conflict(db_session, "u1", T0) is True


@pytest.mark.asyncio
async def test_same_instant_in_another_offset_conflicts(db_session):
    await _add(db_session, "u1", T0)
    same_instant = T0.astimezone(timezone(timedelta(hours=-3)))
    assert await has_conflict(db_session, "u1", same_instant) is True


@pytest.mark.asyncio
async def test_naive_timestamp_is_read_as_utc(db_session):
    await _add(db_session, "u1", T0)
    assert await has_conflict(db_session, "u1", T0.replace(tzinfo=None)) is True


@pytest.mark.asyncio
async def test_other_owner_does_not_conflict(db_session):
    await _add(db_session, "u1", T0)
    assert await has_conflict(db_session, "u2", T0) is False


@pytest.mark.asyncio
async def test_neighbouring_instant_does_not_conflict(db_session):
    await _add(db_session, "u1", T0)
    assert await has_conflict(db_session, "u1", T0 + timedelta(seconds=1)) is False


@pytest.mark.asyncio
async def test_record_does_not_conflict_with_itself(db_session):
    row = await _add(db_session, "u1", T0)
    assert await has_conflict(db_session, "u1", T0, exclude_id=row.id) is False


@pytest.mark.asyncio
async def test_exclusion_only_covers_the_given_id(db_session):
    await _add(db_session, "u1", T0)
    other = await _add(db_session, "u1", T0 + timedelta(hours=1))
    assert await has_conflict(db_session, "u1", T0, exclude_id=other.id) is True
