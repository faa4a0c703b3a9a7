"""Receipt and settlement Pydantic schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from rental_billing.models.enums import ReceiptStatus


class ReceiptItemSchema(BaseModel):
    """One receipt line."""

    description: str
    amount: Decimal


class ReceiptResponse(BaseModel):
    """Monthly receipt, either previewed or issued.

    balance = total_payments - total_due, so a negative balance means the
    tenant still owes money for the month. id is None for an unissued preview.
    """

    id: int | None = None
    contract_id: int
    month: int
    year: int
    status: ReceiptStatus
    tenant_name: str
    department_name: str
    property_address: str
    period: str
    items: list[ReceiptItemSchema]
    total_payments: Decimal
    total_due: Decimal
    balance: Decimal


class ReceiptStatusUpdate(BaseModel):
    """Schema for moving an issued receipt through the approval workflow."""

    status: ReceiptStatus


class SettlementResult(BaseModel):
    """Final balance of a contract at move-out.

    final_balance = total_payments - total_charges: positive means the tenant
    paid more than was charged and is owed a refund, negative means the
    tenant still owes.
    """

    contract_id: int
    tenant_name: str
    department_name: str
    property_address: str
    contract_start_date: date
    contract_end_date: date
    actual_end_date: date
    months_charged: int
    days_overstayed: int
    daily_rent: Decimal
    total_charges: Decimal
    total_payments: Decimal
    advance_payment_used: bool
    guarantee_deduction: Decimal
    final_balance: Decimal
