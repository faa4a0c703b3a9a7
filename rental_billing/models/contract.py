"""Contract database model."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base

if TYPE_CHECKING:
    from rental_billing.models.charge import ExtraCharge
    from rental_billing.models.department import Department
    from rental_billing.models.payment import Payment
    from rental_billing.models.receipt import Receipt
    from rental_billing.models.tenant import Tenant


class Contract(Base):
    """Rental agreement between a tenant and a department."""

    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    start_date: Mapped[date]
    end_date: Mapped[date]
    rent_amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    advance_payment: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("0"),
    )  # One month's rent paid upfront
    guarantee_deposit: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("0"),
    )  # Security deposit

    # Foreign keys
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id"), index=True)
    department_id: Mapped[int] = mapped_column(ForeignKey("departments.id"), index=True)

    # Relationships
    tenant: Mapped["Tenant"] = relationship(back_populates="contracts")
    department: Mapped["Department"] = relationship(back_populates="contracts")
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
    )
    extra_charges: Mapped[list["ExtraCharge"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
    )
    receipts: Mapped[list["Receipt"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
    )
