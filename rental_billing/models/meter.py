"""DepartmentMeter database model."""

from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base
from rental_billing.models.enums import MeterType

if TYPE_CHECKING:
    from rental_billing.models.department import Department
    from rental_billing.models.meter_reading import MeterReading


class DepartmentMeter(Base):
    """Light or water meter attached to a department."""

    __tablename__ = "department_meters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    meter_type: Mapped[MeterType] = mapped_column(
        Enum(MeterType, values_callable=lambda e: [m.value for m in e]),
        index=True,
    )

    # Foreign keys
    department_id: Mapped[int] = mapped_column(
        ForeignKey("departments.id", ondelete="CASCADE"),
        index=True,
    )

    # Relationships
    department: Mapped["Department"] = relationship(back_populates="meters")
    readings: Mapped[list["MeterReading"]] = relationship(
        back_populates="meter",
        cascade="all, delete-orphan",
    )
