"""MeterReading service - the reading ledger operations."""

import logging
from datetime import date

from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.orm import Session

from rental_billing.models.meter_reading import MeterReading
from rental_billing.schemas.meter import MeterReadingCreate, MeterReadingUpdate
from rental_billing.services.meter import get_meter

logger = logging.getLogger(__name__)


def create_reading(db: Session, reading_data: MeterReadingCreate) -> MeterReading:
    """Record a single meter reading."""
    get_meter(db, reading_data.meter_id)

    last = get_last_readings(db, reading_data.meter_id, 1)
    if last and reading_data.reading < last[0].reading:
        logger.warning(
            "Reading %s for meter %s is below the previous reading %s (%s)",
            reading_data.reading,
            reading_data.meter_id,
            last[0].reading,
            last[0].reading_date,
        )

    db_reading = MeterReading(
        meter_id=reading_data.meter_id,
        reading=reading_data.reading,
        reading_date=reading_data.reading_date,
    )
    db.add(db_reading)
    db.commit()
    db.refresh(db_reading)
    return db_reading


def get_reading(db: Session, reading_id: int) -> MeterReading:
    """Get a reading by ID."""
    reading = db.query(MeterReading).filter(MeterReading.id == reading_id).first()
    if not reading:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter reading not found",
        )
    return reading


def update_reading(
    db: Session,
    reading_id: int,
    reading_data: MeterReadingUpdate,
) -> MeterReading:
    """Correct a data-entry mistake in a recorded reading."""
    reading = get_reading(db, reading_id)

    update_data = reading_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(reading, field, value)

    db.commit()
    db.refresh(reading)
    return reading


def delete_reading(db: Session, reading_id: int) -> None:
    """Delete a recorded reading."""
    reading = get_reading(db, reading_id)
    db.delete(reading)
    db.commit()


def get_readings_history(
    db: Session,
    meter_id: int,
    limit: int = 100,
    offset: int = 0,
) -> tuple[list[MeterReading], int]:
    """Get reading history for a specific meter with pagination, newest first."""
    query = db.query(MeterReading).filter(MeterReading.meter_id == meter_id)
    total = query.count()
    readings = (
        query.order_by(MeterReading.reading_date.desc(), MeterReading.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return readings, total


def get_readings_in_period(
    db: Session,
    meter_id: int,
    start_date: date,
    end_date: date,
) -> list[MeterReading]:
    """Readings dated within [start_date, end_date], oldest first."""
    return (
        db.query(MeterReading)
        .filter(
            and_(
                MeterReading.meter_id == meter_id,
                MeterReading.reading_date >= start_date,
                MeterReading.reading_date <= end_date,
            )
        )
        .order_by(MeterReading.reading_date, MeterReading.id)
        .all()
    )


def get_last_readings(db: Session, meter_id: int, count: int = 2) -> list[MeterReading]:
    """The most recent readings of a meter, newest first."""
    return (
        db.query(MeterReading)
        .filter(MeterReading.meter_id == meter_id)
        .order_by(MeterReading.reading_date.desc(), MeterReading.id.desc())
        .limit(count)
        .all()
    )
