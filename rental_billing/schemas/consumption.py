"""Consumption calculation schemas."""

from decimal import Decimal

from pydantic import BaseModel


class PeriodConsumption(BaseModel):
    """Consumption of one meter type over a billing period.

    Both values are zero when the department has no meter of the type or
    fewer than two readings fall inside the period.
    """

    consumption: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")


class MeterConsumption(PeriodConsumption):
    """Latest consumption of one meter type, independent of any period."""

    last_reading: Decimal | None = None
    prev_reading: Decimal | None = None


class CurrentConsumption(BaseModel):
    """Latest light and water consumption for a department."""

    light: MeterConsumption
    water: MeterConsumption
