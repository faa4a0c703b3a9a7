"""ExtraCharge database model."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base

if TYPE_CHECKING:
    from rental_billing.models.contract import Contract


class ExtraCharge(Base):
    """One-off charge billed on a contract's receipt for a given month."""

    __tablename__ = "extra_charges"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    description: Mapped[str] = mapped_column(String(255))
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    month: Mapped[int]
    year: Mapped[int]

    # Foreign keys
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"),
        index=True,
    )

    # Relationships
    contract: Mapped["Contract"] = relationship(back_populates="extra_charges")
