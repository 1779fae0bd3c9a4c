"""Wire <-> internal conversion for intake records. Shapes only; rules live in the service and the validators."""

from datetime import datetime
from decimal import Decimal

from hydration_tracker.core.timeutils import as_utc
from hydration_tracker.models.intake_record import IntakeRecord
from hydration_tracker.schemas.intake import IntakeCreate, IntakeResponse, IntakeUpdate
from hydration_tracker.schemas.pagination import PageResponse
from hydration_tracker.services.intake_filter import FilterCriteria
from hydration_tracker.services.intake_records import IntakeDraft
from hydration_tracker.services.pagination import Page
from hydration_tracker.services.units import normalize_quantity


def to_draft(body: IntakeCreate | IntakeUpdate) -> IntakeDraft:
    return IntakeDraft(
        timestamp_utc=body.timestamp_utc,
        volume=body.volume,
        volume_unit=body.volume_unit,
    )


def to_response(row: IntakeRecord) -> IntakeResponse:
    return IntakeResponse(
        id=row.id,
        timestamp_utc=as_utc(row.timestamp_utc),
        volume=float(normalize_quantity(row.entered_volume)),
        volume_unit=row.volume_unit,
        volume_ml=float(row.volume),
    )


def to_page_response(page: Page[IntakeRecord]) -> PageResponse[IntakeResponse]:
    return PageResponse[IntakeResponse](
        content=[to_response(r) for r in page.content],
        total_elements=page.total_elements,
        total_pages=page.total_pages,
        page_size=page.page_size,
        page_number=page.page_number,
        first=page.first,
        last=page.last,
    )


def to_criteria(
    start_utc: datetime | None = None,
    end_utc: datetime | None = None,
    min_volume: Decimal | None = None,
    max_volume: Decimal | None = None,
    volume_unit: str | None = None,
    page: int = 0,
    size: int | None = None,
    sort_field: str = "timestamp_utc",
    sort_direction: str = "ASC",
) -> FilterCriteria:
    return FilterCriteria(
        start_utc=start_utc,
        end_utc=end_utc,
        min_volume=min_volume,
        max_volume=max_volume,
        volume_unit=volume_unit,
        page=page,
        size=size,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
