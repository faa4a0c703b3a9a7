"""Department (rentable unit) database model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base

if TYPE_CHECKING:
    from rental_billing.models.contract import Contract
    from rental_billing.models.meter import DepartmentMeter
    from rental_billing.models.property import Property


class Department(Base):
    """Rentable unit inside a property."""

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    floor: Mapped[int] = mapped_column(default=0)
    number_of_rooms: Mapped[int] = mapped_column(default=1)
    # Flipped off while an active contract exists
    is_available: Mapped[bool] = mapped_column(default=True)

    # Foreign keys
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)

    # Relationships
    parent_property: Mapped["Property"] = relationship(back_populates="departments")
    meters: Mapped[list["DepartmentMeter"]] = relationship(
        back_populates="department",
        cascade="all, delete-orphan",
    )
    contracts: Mapped[list["Contract"]] = relationship(back_populates="department")
