"""Receipt database model - the persisted monthly bill."""

import json
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, NamedTuple

from sqlalchemy import Enum, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_billing.core.database import Base
from rental_billing.models.enums import ReceiptStatus

if TYPE_CHECKING:
    from rental_billing.models.contract import Contract


class ReceiptItem(NamedTuple):
    """One line on a receipt. Payments appear with a negative amount."""

    description: str
    amount: Decimal


class Receipt(Base):
    """Issued receipt for one contract and calendar month.

    The tenant, department and address fields are a snapshot taken at issue
    time and are not updated if the underlying records are renamed later.

    Items are stored as a JSON list:

        [{"description": "Monthly Rent", "amount": "1000.00"}, ...]

    Amounts are kept as strings so that Decimal values survive the round trip.
    """

    __tablename__ = "receipts"
    __table_args__ = (
        UniqueConstraint("contract_id", "month", "year", name="uq_receipt_contract_period"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    month: Mapped[int]
    year: Mapped[int]
    status: Mapped[ReceiptStatus] = mapped_column(
        Enum(ReceiptStatus, values_callable=lambda e: [m.value for m in e]),
        default=ReceiptStatus.PENDING_REVIEW,
        index=True,
    )

    tenant_name: Mapped[str] = mapped_column(String(100))
    department_name: Mapped[str] = mapped_column(String(100))
    property_address: Mapped[str] = mapped_column(String(255))
    period: Mapped[str] = mapped_column(String(64))

    items_json: Mapped[str] = mapped_column(Text, default="[]")
    total_payments: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    total_due: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    balance: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Foreign keys
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"),
        index=True,
    )

    # Relationships
    contract: Mapped["Contract"] = relationship(back_populates="receipts")

    def get_items(self) -> list[ReceiptItem]:
        """Parse the stored JSON items into ReceiptItem values, in order."""
        raw = json.loads(self.items_json or "[]")
        return [ReceiptItem(item["description"], Decimal(str(item["amount"]))) for item in raw]

    def set_items(self, items: list[ReceiptItem]) -> None:
        """Serialize receipt items to JSON for storage."""
        self.items_json = json.dumps(
            [{"description": item.description, "amount": str(item.amount)} for item in items]
        )
