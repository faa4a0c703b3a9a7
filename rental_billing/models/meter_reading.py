"""MeterReading database model - the reading ledger."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base

if TYPE_CHECKING:
    from rental_billing.models.meter import DepartmentMeter


class MeterReading(Base):
    """Meter reading ledger entry.

    Consumption is never stored here; it is always derived from pairs of
    readings.
    """

    __tablename__ = "meter_readings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    reading: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    reading_date: Mapped[date] = mapped_column(index=True)  # When reading was taken
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
    )  # When added to database

    # Foreign keys
    meter_id: Mapped[int] = mapped_column(
        ForeignKey("department_meters.id", ondelete="CASCADE"),
        index=True,
    )

    # Relationships
    meter: Mapped["DepartmentMeter"] = relationship(back_populates="readings")
