"""Department meter and meter reading Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from rental_billing.models.enums import MeterType


class MeterCreate(BaseModel):
    """Schema for attaching a meter to a department."""

    department_id: int
    meter_type: MeterType


class MeterResponse(BaseModel):
    """Schema for meter response."""

    id: int
    department_id: int
    meter_type: MeterType

    model_config = {"from_attributes": True}


class MeterReadingCreate(BaseModel):
    """Schema for recording a single meter reading."""

    meter_id: int
    reading: Decimal = Field(ge=0)
    reading_date: date


class MeterReadingUpdate(BaseModel):
    """Schema for correcting a recorded reading."""

    reading: Decimal | None = Field(default=None, ge=0)
    reading_date: date | None = None

    @model_validator(mode="after")
    def check_at_least_one_field(self) -> "MeterReadingUpdate":
        """Ensure at least one field is provided for update."""
        if self.reading is None and self.reading_date is None:
            raise ValueError("At least one field must be provided for update")
        return self


class MeterReadingResponse(BaseModel):
    """Schema for meter reading response."""

    id: int
    meter_id: int
    reading: Decimal
    reading_date: date
    created_at: datetime

    model_config = {"from_attributes": True}


class MeterReadingHistory(BaseModel):
    """Schema for paginated meter reading history."""

    meter_id: int
    readings: list[MeterReadingResponse]
    total: int
    limit: int
    offset: int
