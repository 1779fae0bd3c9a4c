"""
Semantic validation of intake list filters.
Every rule runs on every call: the caller gets all violations at once, as message keys in rule order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from hydration_tracker.config import Settings, settings as default_settings
from hydration_tracker.core.timeutils import as_utc
from hydration_tracker.services.units import VolumeUnit, is_known_unit

SORT_FIELDS = ("timestamp_utc", "volume", "created_at", "updated_at")
SORT_DIRECTIONS = ("ASC", "DESC")


@dataclass
class FilterCriteria:
    """List query for one owner. Volume bounds are in milliliters."""

    start_utc: datetime | None = None
    end_utc: datetime | None = None
    min_volume: Decimal | None = None
    max_volume: Decimal | None = None
    volume_unit: str | None = None
    page: int = 0
    size: int | None = None  # None -> settings.default_page_size
    sort_field: str = "timestamp_utc"
    sort_direction: str = "ASC"


@dataclass
class FilterValidation:
    criteria: FilterCriteria
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_not_future(criteria: FilterCriteria, now: datetime, errors: list[str]) -> None:
    bounds = [b for b in (criteria.start_utc, criteria.end_utc) if b is not None]
    if any(as_utc(b) > now for b in bounds):
        errors.append("intake.filter.date_range.future")


def _check_date_range(criteria: FilterCriteria, max_days: int, errors: list[str]) -> None:
    if criteria.start_utc is None or criteria.end_utc is None:
        return
    start = as_utc(criteria.start_utc)
    end = as_utc(criteria.end_utc)
    if start >= end:
        errors.append("intake.filter.date_range.order")
    elif max_days > 0 and (end - start).days > max_days:  # whole days; the remainder is ignored
        errors.append("intake.filter.date_range.too_wide")


def _check_volume_range(criteria: FilterCriteria, errors: list[str]) -> None:
    bounds = [b for b in (criteria.min_volume, criteria.max_volume) if b is not None]
    if any(b < 0 for b in bounds):
        errors.append("intake.filter.volume.negative")
    if criteria.min_volume is not None and criteria.max_volume is not None:
        if criteria.min_volume > criteria.max_volume:
            errors.append("intake.filter.volume_range.order")


def _check_unit(criteria: FilterCriteria, errors: list[str]) -> None:
    if criteria.volume_unit is not None and not is_known_unit(criteria.volume_unit, VolumeUnit):
        errors.append("intake.filter.volume_unit.unknown")


def _check_pagination(criteria: FilterCriteria, max_page_size: int, errors: list[str]) -> None:
    if criteria.size is not None and not (0 < criteria.size <= max_page_size):
        errors.append("intake.filter.page_size.range")
    if criteria.page < 0:
        errors.append("intake.filter.page.negative")


def _check_sort(criteria: FilterCriteria, errors: list[str]) -> None:
    if criteria.sort_field not in SORT_FIELDS:
        errors.append("intake.filter.sort_field.invalid")
    if (criteria.sort_direction or "").upper() not in SORT_DIRECTIONS:
        errors.append("intake.filter.sort_direction.invalid")


def validate_filter(criteria: FilterCriteria, settings: Settings | None = None) -> FilterValidation:
    """Run all filter rules and return the criteria together with every violation found."""
    cfg = settings or default_settings
    errors: list[str] = []
    _check_not_future(criteria, datetime.now(timezone.utc), errors)
    _check_date_range(criteria, cfg.max_filter_range_days, errors)
    _check_volume_range(criteria, errors)
    _check_unit(criteria, errors)
    _check_pagination(criteria, cfg.max_page_size, errors)
    _check_sort(criteria, errors)
    return FilterValidation(criteria=criteria, errors=errors)
