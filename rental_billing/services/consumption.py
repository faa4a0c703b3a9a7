"""Utility consumption calculations for departments.

Consumption is always derived from meter readings:

    consumption = last_reading - first_reading
    cost = consumption * rate_per_unit

The rate comes from the department's property when it has one configured,
otherwise from the defaults the calculator was built with.
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from sqlalchemy.orm import Session

from rental_billing.core.config import settings
from rental_billing.models.department import Department
from rental_billing.models.enums import MeterType
from rental_billing.models.meter import DepartmentMeter
from rental_billing.models.property import Property
from rental_billing.schemas.consumption import (
    CurrentConsumption,
    MeterConsumption,
    PeriodConsumption,
)
from rental_billing.services.meter import get_meters_for_department
from rental_billing.services.meter_reading import get_last_readings, get_readings_in_period

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class RateDefaults(NamedTuple):
    """Fallback per-unit rates for properties without their own."""

    light: Decimal
    water: Decimal

    def for_type(self, meter_type: MeterType) -> Decimal:
        return self.light if meter_type == MeterType.LIGHT else self.water


class ConsumptionCalculator:
    """Computes light and water consumption and cost for departments."""

    def __init__(
        self,
        db_session: Session,
        default_rates: RateDefaults,
        aggregation: str = "single",
    ):
        self.db = db_session
        self.default_rates = default_rates
        self.aggregation = aggregation

    def resolve_rate(self, department_id: int, meter_type: MeterType) -> Decimal:
        """Per-unit rate for a department: property rate first, then the default."""
        prop = (
            self.db.query(Property)
            .join(Property.departments)
            .filter(Department.id == department_id)
            .first()
        )
        if prop is not None:
            rate = (
                prop.light_cost_per_unit
                if meter_type == MeterType.LIGHT
                else prop.water_cost_per_unit
            )
            if rate is not None:
                return Decimal(rate)
        return self.default_rates.for_type(meter_type)

    def _meters(self, department_id: int, meter_type: MeterType) -> list[DepartmentMeter]:
        meters = get_meters_for_department(self.db, department_id, meter_type)
        if self.aggregation == "single":
            return meters[:1]
        return meters

    def consumption_for_period(
        self,
        department_id: int,
        meter_type: MeterType,
        start_date: date,
        end_date: date,
    ) -> PeriodConsumption:
        """Consumption between the first and last reading inside [start_date, end_date].

        Returns zeros when the department has no meter of this type or fewer
        than two readings fall inside the period. A decreasing pair of
        readings gives a negative consumption, which is returned unchanged.
        """
        meters = self._meters(department_id, meter_type)
        if not meters:
            return PeriodConsumption()

        consumption: Decimal | None = None
        for meter in meters:
            readings = get_readings_in_period(self.db, meter.id, start_date, end_date)
            if len(readings) < 2:
                continue
            delta = Decimal(readings[-1].reading) - Decimal(readings[0].reading)
            consumption = delta if consumption is None else consumption + delta

        if consumption is None:
            return PeriodConsumption()

        if consumption < 0:
            logger.warning(
                "Negative %s consumption %s for department %s between %s and %s",
                meter_type.value,
                consumption,
                department_id,
                start_date,
                end_date,
            )

        rate = self.resolve_rate(department_id, meter_type)
        cost = (consumption * rate).quantize(CENTS, rounding=ROUND_HALF_UP)
        logger.debug(
            "Department %s %s: consumption=%s rate=%s cost=%s",
            department_id,
            meter_type.value,
            consumption,
            rate,
            cost,
        )
        return PeriodConsumption(consumption=consumption, cost=cost)

    def _latest_for_type(self, department_id: int, meter_type: MeterType) -> MeterConsumption:
        meters = self._meters(department_id, meter_type)

        # Meters with two readings are reported together; single-reading
        # meters only show up when no meter has a pair.
        paired: list[tuple[Decimal, Decimal]] = []
        lone: list[Decimal] = []
        for meter in meters:
            readings = get_last_readings(self.db, meter.id, 2)
            if len(readings) == 2:
                paired.append((Decimal(readings[0].reading), Decimal(readings[1].reading)))
            elif readings:
                lone.append(Decimal(readings[0].reading))

        if not paired:
            return MeterConsumption(last_reading=sum(lone) if lone else None)

        last_reading = sum(last for last, _ in paired)
        prev_reading = sum(prev for _, prev in paired)
        consumption = last_reading - prev_reading
        rate = self.resolve_rate(department_id, meter_type)
        return MeterConsumption(
            consumption=consumption,
            cost=(consumption * rate).quantize(CENTS, rounding=ROUND_HALF_UP),
            last_reading=last_reading,
            prev_reading=prev_reading,
        )

    def current_consumption(self, department_id: int) -> CurrentConsumption:
        """Consumption between the two most recent readings of each meter type.

        Not tied to any billing period; meant for live dashboards.
        """
        return CurrentConsumption(
            light=self._latest_for_type(department_id, MeterType.LIGHT),
            water=self._latest_for_type(department_id, MeterType.WATER),
        )


def get_consumption_calculator(db: Session) -> ConsumptionCalculator:
    """Build a calculator configured from application settings."""
    return ConsumptionCalculator(
        db,
        default_rates=RateDefaults(
            light=settings.DEFAULT_LIGHT_COST_PER_UNIT,
            water=settings.DEFAULT_WATER_COST_PER_UNIT,
        ),
        aggregation=settings.METER_AGGREGATION,
    )
