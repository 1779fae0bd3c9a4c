"""Tests for intake filter validation: every rule is checked and all violations are reported together."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from hydration_tracker.config import Settings
from hydration_tracker.services.intake_filter import FilterCriteria, validate_filter

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _settings(**overrides) -> Settings:
    base = {"max_page_size": 50, "default_page_size": 10, "max_filter_range_days": 31}
    base.update(overrides)
    return Settings(**base)


def test_empty_criteria_is_valid():
    result = validate_filter(FilterCriteria(), _settings())
    assert result.is_valid
    assert result.errors == []


def test_start_before_end_is_valid():
    result = validate_filter(FilterCriteria(start_utc=START, end_utc=START + timedelta(days=1)), _settings())
    assert result.is_valid


def test_start_after_end_is_invalid():
    result = validate_filter(FilterCriteria(start_utc=START + timedelta(hours=1), end_utc=START), _settings())
    assert result.errors == ["intake.filter.date_range.order"]


def test_equal_bounds_are_invalid():
    result = validate_filter(FilterCriteria(start_utc=START, end_utc=START), _settings())
    assert result.errors == ["intake.filter.date_range.order"]


def test_bounds_compared_as_instants_across_offsets():
    # 01:00+02:00 is 23:00Z the previous day, so it is before 2024-01-01T00:00Z
    plus_two = timezone(timedelta(hours=2))
    result = validate_filter(
        FilterCriteria(start_utc=datetime(2024, 1, 1, 1, tzinfo=plus_two), end_utc=START),
        _settings(),
    )
    assert result.is_valid


def test_only_one_bound_is_fine():
    assert validate_filter(FilterCriteria(start_utc=START), _settings()).is_valid
    assert validate_filter(FilterCriteria(end_utc=START), _settings()).is_valid


def test_range_wider_than_limit_is_invalid():
    result = validate_filter(FilterCriteria(start_utc=START, end_utc=START + timedelta(days=32)), _settings())
    assert result.errors == ["intake.filter.date_range.too_wide"]


def test_range_limit_can_be_disabled():
    result = validate_filter(
        FilterCriteria(start_utc=START, end_utc=START + timedelta(days=400)),
        _settings(max_filter_range_days=0),
    )
    assert result.is_valid


def test_min_volume_above_max_is_invalid():
    result = validate_filter(FilterCriteria(min_volume=Decimal("500"), max_volume=Decimal("100")), _settings())
    assert result.errors == ["intake.filter.volume_range.order"]


def test_equal_volume_bounds_are_valid():
    result = validate_filter(FilterCriteria(min_volume=Decimal("250"), max_volume=Decimal("250")), _settings())
    assert result.is_valid


def test_negative_volume_bound_is_invalid():
    result = validate_filter(FilterCriteria(min_volume=Decimal("-1")), _settings())
    assert result.errors == ["intake.filter.volume.negative"]


def test_unknown_volume_unit_is_invalid():
    result = validate_filter(FilterCriteria(volume_unit="GALLON"), _settings())
    assert result.errors == ["intake.filter.volume_unit.unknown"]


def test_known_volume_unit_alias_is_valid():
    assert validate_filter(FilterCriteria(volume_unit="liter"), _settings()).is_valid


def test_page_size_bounds():
    cfg = _settings(max_page_size=5)
    assert validate_filter(FilterCriteria(size=5), cfg).is_valid
    assert validate_filter(FilterCriteria(size=6), cfg).errors == ["intake.filter.page_size.range"]
    assert validate_filter(FilterCriteria(size=0), cfg).errors == ["intake.filter.page_size.range"]


def test_negative_page_is_invalid():
    result = validate_filter(FilterCriteria(page=-1), _settings())
    assert result.errors == ["intake.filter.page.negative"]


def test_sort_criteria():
    assert validate_filter(FilterCriteria(sort_field="volume", sort_direction="desc"), _settings()).is_valid
    result = validate_filter(FilterCriteria(sort_field="owner_id", sort_direction="SIDEWAYS"), _settings())
    assert result.errors == ["intake.filter.sort_field.invalid", "intake.filter.sort_direction.invalid"]


def test_all_violations_reported_in_rule_order():
    criteria = FilterCriteria(
        start_utc=START + timedelta(days=2),
        end_utc=START,
        min_volume=Decimal("900"),
        max_volume=Decimal("100"),
        volume_unit="CUP",
        page=-3,
        size=0,
    )
    result = validate_filter(criteria, _settings())
    assert not result.is_valid
    assert result.criteria is criteria
    assert result.errors == [
        "intake.filter.date_range.order",
        "intake.filter.volume_range.order",
        "intake.filter.volume_unit.unknown",
        "intake.filter.page_size.range",
        "intake.filter.page.negative",
    ]


def test_span_counts_whole_days_only():
    end = START + timedelta(days=31, hours=5)
    assert validate_filter(FilterCriteria(start_utc=START, end_utc=end), _settings()).is_valid


def test_future_bounds_are_invalid():
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    result = validate_filter(FilterCriteria(start_utc=START, end_utc=tomorrow), _settings(max_filter_range_days=0))
    assert result.errors == ["intake.filter.date_range.future"]
    result = validate_filter(FilterCriteria(start_utc=tomorrow), _settings())
    assert result.errors == ["intake.filter.date_range.future"]


def test_audit_timestamps_are_sortable():
    assert validate_filter(FilterCriteria(sort_field="created_at"), _settings()).is_valid
    assert validate_filter(FilterCriteria(sort_field="updated_at", sort_direction="DESC"), _settings()).is_valid
