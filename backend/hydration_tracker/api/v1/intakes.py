"""Water intake API: owner-scoped CRUD and filtered, paginated listing."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from hydration_tracker.api.deps import get_owner_id
from hydration_tracker.db.session import get_db
from hydration_tracker.schemas.intake import IntakeCreate, IntakeResponse, IntakeUpdate
from hydration_tracker.schemas.pagination import PageResponse
from hydration_tracker.services import intake_mapper
from hydration_tracker.services.intake_records import (
    create_intake,
    delete_intake,
    get_intake,
    list_intakes,
    update_intake,
)

router = APIRouter(prefix="/intakes", tags=["intakes"])

_AUTH = {401: {"description": "Not authenticated"}}
_NOT_FOUND = {404: {"description": "Intake not found"}}


@router.get(
    "",
    response_model=PageResponse[IntakeResponse],
    summary="List intakes",
    responses={**_AUTH, 400: {"description": "Invalid filter"}},
)
async def list_intake_records(
    session: Annotated[AsyncSession, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_owner_id)],
    start_utc: datetime | None = None,
    end_utc: datetime | None = None,
    min_volume: Decimal | None = None,
    max_volume: Decimal | None = None,
    volume_unit: str | None = None,
    page: int = 0,
    size: int | None = None,
    sort_field: str = "timestamp_utc",
    sort_direction: str = "ASC",
) -> PageResponse[IntakeResponse]:
    """List the caller's intakes. Bounds are checked together; all violations come back in one 400."""
    criteria = intake_mapper.to_criteria(
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
    result = await list_intakes(session, owner_id, criteria)
    return intake_mapper.to_page_response(result)


@router.post(
    "",
    response_model=IntakeResponse,
    status_code=201,
    summary="Log intake",
    responses={**_AUTH, 400: {"description": "Unknown unit"}, 409: {"description": "Duplicate timestamp"}},
)
async def create_intake_record(
    session: Annotated[AsyncSession, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_owner_id)],
    body: IntakeCreate,
) -> IntakeResponse:
    record = await create_intake(session, owner_id, intake_mapper.to_draft(body))
    await session.commit()
    return intake_mapper.to_response(record)


@router.get(
    "/{intake_id}",
    response_model=IntakeResponse,
    summary="Get intake",
    responses={**_AUTH, **_NOT_FOUND},
)
async def get_intake_record(
    session: Annotated[AsyncSession, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_owner_id)],
    intake_id: int,
) -> IntakeResponse:
    record = await get_intake(session, owner_id, intake_id)
    return intake_mapper.to_response(record)


@router.put(
    "/{intake_id}",
    response_model=IntakeResponse,
    summary="Update intake",
    responses={**_AUTH, **_NOT_FOUND, 409: {"description": "Duplicate timestamp"}},
)
async def update_intake_record(
    session: Annotated[AsyncSession, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_owner_id)],
    intake_id: int,
    body: IntakeUpdate,
) -> IntakeResponse:
    record = await update_intake(session, owner_id, intake_id, intake_mapper.to_draft(body))
    await session.commit()
    return intake_mapper.to_response(record)


@router.delete(
    "/{intake_id}",
    status_code=204,
    summary="Delete intake",
    responses={**_AUTH, **_NOT_FOUND},
)
async def delete_intake_record(
    session: Annotated[AsyncSession, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_owner_id)],
    intake_id: int,
) -> Response:
    await delete_intake(session, owner_id, intake_id)
    await session.commit()
    return Response(status_code=204)
