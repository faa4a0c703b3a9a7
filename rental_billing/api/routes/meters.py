"""Department meter and reading routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.schemas.meter import (
    MeterCreate,
    MeterReadingCreate,
    MeterReadingHistory,
    MeterReadingResponse,
    MeterReadingUpdate,
    MeterResponse,
)
from rental_billing.services import meter as meter_service
from rental_billing.services import meter_reading as reading_service

router = APIRouter(tags=["meters"])


@router.post("/meters/", response_model=MeterResponse, status_code=status.HTTP_201_CREATED)
def create_meter(
    meter_data: MeterCreate,
    db: Session = Depends(get_db),
):
    """Attach a light or water meter to a department."""
    return meter_service.create_meter(db, meter_data)


@router.get("/meters/{meter_id}", response_model=MeterResponse)
def get_meter(
    meter_id: int,
    db: Session = Depends(get_db),
):
    """Get a meter by ID."""
    return meter_service.get_meter(db, meter_id)


@router.delete("/meters/{meter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meter(
    meter_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Remove a meter and its readings."""
    meter_service.delete_meter(db, meter_id)


@router.get("/meters/{meter_id}/readings", response_model=MeterReadingHistory)
def get_meter_reading_history(
    meter_id: int,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Get reading history for a meter with pagination, newest first."""
    meter_service.get_meter(db, meter_id)
    readings, total = reading_service.get_readings_history(db, meter_id, limit, offset)
    return MeterReadingHistory(
        meter_id=meter_id,
        readings=[MeterReadingResponse.model_validate(r) for r in readings],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post(
    "/readings/",
    response_model=MeterReadingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reading(
    reading_data: MeterReadingCreate,
    db: Session = Depends(get_db),
):
    """Record a single meter reading."""
    return reading_service.create_reading(db, reading_data)


@router.patch("/readings/{reading_id}", response_model=MeterReadingResponse)
def update_reading(
    reading_id: int,
    reading_data: MeterReadingUpdate,
    db: Session = Depends(get_db),
):
    """Correct a recorded reading."""
    return reading_service.update_reading(db, reading_id, reading_data)


@router.delete("/readings/{reading_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reading(
    reading_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a recorded reading."""
    reading_service.delete_reading(db, reading_id)
