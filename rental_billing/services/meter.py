"""Department meter service."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from rental_billing.core.config import settings
from rental_billing.models.enums import MeterType
from rental_billing.models.meter import DepartmentMeter
from rental_billing.schemas.meter import MeterCreate
from rental_billing.services.property import get_department


def create_meter(
    db: Session,
    meter_data: MeterCreate,
    aggregation: str | None = None,
) -> DepartmentMeter:
    """Attach a light or water meter to a department.

    With "single" aggregation a department may hold only one meter per type.
    """
    aggregation = aggregation or settings.METER_AGGREGATION
    get_department(db, meter_data.department_id)

    if aggregation == "single":
        existing = get_meters_for_department(db, meter_data.department_id, meter_data.meter_type)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Department already has a {meter_data.meter_type.value} meter",
            )

    meter = DepartmentMeter(
        department_id=meter_data.department_id,
        meter_type=meter_data.meter_type,
    )
    db.add(meter)
    db.commit()
    db.refresh(meter)
    return meter


def get_meter(db: Session, meter_id: int) -> DepartmentMeter:
    """Get a meter by ID."""
    meter = db.query(DepartmentMeter).filter(DepartmentMeter.id == meter_id).first()
    if not meter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter not found",
        )
    return meter


def get_meters_for_department(
    db: Session,
    department_id: int,
    meter_type: MeterType | None = None,
) -> list[DepartmentMeter]:
    """Get a department's meters, optionally of one type, oldest first."""
    query = db.query(DepartmentMeter).filter(DepartmentMeter.department_id == department_id)
    if meter_type is not None:
        query = query.filter(DepartmentMeter.meter_type == meter_type)
    return query.order_by(DepartmentMeter.id).all()


def delete_meter(db: Session, meter_id: int) -> None:
    """Remove a meter together with its readings."""
    meter = get_meter(db, meter_id)
    db.delete(meter)
    db.commit()
