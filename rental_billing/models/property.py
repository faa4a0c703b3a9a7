"""Property database model."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base

if TYPE_CHECKING:
    from rental_billing.models.department import Department


class Property(Base):
    """Building that holds rentable departments.

    Carries the per-unit utility rates used when billing its departments.
    """

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    address: Mapped[str] = mapped_column(String(255))
    light_cost_per_unit: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=10, scale=4),
        nullable=True,
    )
    water_cost_per_unit: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=10, scale=4),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    departments: Mapped[list["Department"]] = relationship(back_populates="parent_property")
