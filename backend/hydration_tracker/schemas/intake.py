"""Pydantic schemas for the water intake API."""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from hydration_tracker.services.units import VolumeUnit, is_known_unit, to_milliliters

MAX_VOLUME_ML = Decimal("5000")


class IntakeCreate(BaseModel):
    """Body for logging one intake. Naive timestamps are read as UTC."""

    timestamp_utc: datetime
    volume: Decimal = Field(..., ge=0, decimal_places=3, description="Amount in volume_unit")
    volume_unit: str = Field("ML", min_length=1, max_length=16, description="ML, L or FL_OZ")

    @field_validator("timestamp_utc")
    @classmethod
    def not_in_future(cls, v: datetime) -> datetime:
        aware = v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)
        if aware > datetime.now(timezone.utc):
            raise ValueError("timestamp_utc must not be in the future")
        return v

    @model_validator(mode="after")
    def volume_within_cap(self):
        # unknown units are left to the service, which answers with UnknownUnitError
        if is_known_unit(self.volume_unit, VolumeUnit):
            if to_milliliters(self.volume, self.volume_unit) > MAX_VOLUME_ML:
                raise ValueError(f"volume must not exceed {MAX_VOLUME_ML} ml")
        return self


class IntakeUpdate(IntakeCreate):
    """Body for PUT: full replacement of timestamp and volume."""


class IntakeResponse(BaseModel):
    """Single intake as returned by the API; volume is expressed in volume_unit."""

    id: int
    timestamp_utc: datetime
    volume: float
    volume_unit: str
    volume_ml: float
