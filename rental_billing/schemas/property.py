"""Property and Department Pydantic schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PropertyBase(BaseModel):
    """Base property schema."""

    name: str
    address: str


class PropertyCreate(PropertyBase):
    """Schema for creating a new property.

    Rates left out get 0.25 light and 0.15 water. An explicit null stores no
    rate, so billing uses the configured default rate instead.
    """

    light_cost_per_unit: Decimal | None = Field(default=Decimal("0.25"), ge=0)
    water_cost_per_unit: Decimal | None = Field(default=Decimal("0.15"), ge=0)


class PropertyUpdate(BaseModel):
    """Schema for updating a property."""

    name: str | None = None
    address: str | None = None
    light_cost_per_unit: Decimal | None = Field(default=None, ge=0)
    water_cost_per_unit: Decimal | None = Field(default=None, ge=0)


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: int
    light_cost_per_unit: Decimal | None
    water_cost_per_unit: Decimal | None
    created_at: datetime

    model_config = {"from_attributes": True}


class DepartmentCreate(BaseModel):
    """Schema for creating a department inside a property."""

    property_id: int
    name: str
    floor: int = 0
    number_of_rooms: int = Field(default=1, ge=0)


class DepartmentResponse(BaseModel):
    """Schema for department response."""

    id: int
    property_id: int
    name: str
    floor: int
    number_of_rooms: int
    is_available: bool

    model_config = {"from_attributes": True}
