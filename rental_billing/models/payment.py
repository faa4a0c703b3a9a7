"""Payment database model."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base
from rental_billing.models.enums import PaymentType

if TYPE_CHECKING:
    from rental_billing.models.contract import Contract


class Payment(Base):
    """Money received on a contract."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    payment_date: Mapped[date] = mapped_column(index=True)
    payment_type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, values_callable=lambda e: [m.value for m in e]),
    )
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Foreign keys
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"),
        index=True,
    )

    # Relationships
    contract: Mapped["Contract"] = relationship(back_populates="payments")
