"""Consumption routes."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.models.enums import MeterType
from rental_billing.schemas.consumption import CurrentConsumption, PeriodConsumption
from rental_billing.services.consumption import get_consumption_calculator
from rental_billing.services.property import get_department

router = APIRouter(prefix="/consumption", tags=["consumption"])


@router.get("/department/{department_id}", response_model=CurrentConsumption)
def get_current_consumption(
    department_id: int,
    db: Session = Depends(get_db),
):
    """Latest light and water consumption, from each meter's two newest readings."""
    get_department(db, department_id)
    return get_consumption_calculator(db).current_consumption(department_id)


@router.get("/department/{department_id}/period", response_model=PeriodConsumption)
def get_period_consumption(
    department_id: int,
    meter_type: MeterType = Query(..., description="light or water"),
    start_date: date = Query(..., description="First day of the period"),
    end_date: date = Query(..., description="Last day of the period"),
    db: Session = Depends(get_db),
):
    """Consumption of one meter type between two dates, both inclusive."""
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )
    get_department(db, department_id)
    return get_consumption_calculator(db).consumption_for_period(
        department_id, meter_type, start_date, end_date
    )
