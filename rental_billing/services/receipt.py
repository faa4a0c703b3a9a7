"""Monthly receipt generation and approval workflow.

A receipt covers one contract and one calendar month:

    total_due = rent + light cost + water cost + extra charges
    balance = total_payments - total_due

Utility costs are only billed when the period's consumption is positive.
Payments received in the month are listed as negative lines for the record;
they are counted through total_payments, not through total_due.

Previewing never writes. Issuing always recomputes from current data and
upserts the row for (contract, month, year), keeping whatever status the
existing row already has.
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rental_billing.models.enums import MeterType, ReceiptStatus
from rental_billing.models.receipt import Receipt, ReceiptItem
from rental_billing.schemas.receipt import ReceiptItemSchema, ReceiptResponse
from rental_billing.services.consumption import (
    ConsumptionCalculator,
    get_consumption_calculator,
)
from rental_billing.services.contract import get_contract, get_contract_with_parties
from rental_billing.services.payment import get_extra_charges, get_payments_in_period

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    period_start = date(year, month, 1)
    period_end = period_start + relativedelta(months=1, days=-1)
    return period_start, period_end


def calculate_receipt(
    db: Session,
    contract_id: int,
    month: int,
    year: int,
    calculator: ConsumptionCalculator | None = None,
) -> ReceiptResponse:
    """Price a contract's month from current data without persisting anything."""
    calculator = calculator or get_consumption_calculator(db)
    contract = get_contract_with_parties(db, contract_id)
    department = contract.department

    period_start, period_end = month_bounds(month, year)
    payments = get_payments_in_period(db, contract.id, period_start, period_end)

    light = calculator.consumption_for_period(
        department.id, MeterType.LIGHT, period_start, period_end
    )
    water = calculator.consumption_for_period(
        department.id, MeterType.WATER, period_start, period_end
    )

    rent = _money(contract.rent_amount)
    items = [ReceiptItem("Monthly Rent", rent)]
    total_due = rent

    if light.consumption > 0:
        items.append(
            ReceiptItem(f"Electricity Consumption ({light.consumption} units)", _money(light.cost))
        )
        total_due += _money(light.cost)

    if water.consumption > 0:
        items.append(
            ReceiptItem(f"Water Consumption ({water.consumption} units)", _money(water.cost))
        )
        total_due += _money(water.cost)

    for charge in get_extra_charges(db, contract.id, month, year):
        items.append(ReceiptItem(f"Other: {charge.description}", _money(charge.amount)))
        total_due += _money(charge.amount)

    total_payments = Decimal("0.00")
    for payment in payments:
        items.append(
            ReceiptItem(
                f"Payment ({payment.payment_type.value}) - {payment.description or 'N/A'}",
                -_money(payment.amount),
            )
        )
        total_payments += _money(payment.amount)

    balance = total_payments - total_due
    logger.debug(
        "Receipt for contract %s %02d/%d: due=%s paid=%s balance=%s",
        contract.id,
        month,
        year,
        total_due,
        total_payments,
        balance,
    )

    return ReceiptResponse(
        contract_id=contract.id,
        month=month,
        year=year,
        status=ReceiptStatus.PENDING_REVIEW,
        tenant_name=contract.tenant.name,
        department_name=department.name,
        property_address=department.parent_property.address,
        period=period_start.strftime("%B %Y"),
        items=[ReceiptItemSchema(description=i.description, amount=i.amount) for i in items],
        total_payments=total_payments,
        total_due=total_due,
        balance=balance,
    )


def receipt_to_response(receipt: Receipt) -> ReceiptResponse:
    """Convert a stored Receipt to a response schema."""
    return ReceiptResponse(
        id=receipt.id,
        contract_id=receipt.contract_id,
        month=receipt.month,
        year=receipt.year,
        status=receipt.status,
        tenant_name=receipt.tenant_name,
        department_name=receipt.department_name,
        property_address=receipt.property_address,
        period=receipt.period,
        items=[
            ReceiptItemSchema(description=i.description, amount=i.amount)
            for i in receipt.get_items()
        ],
        total_payments=receipt.total_payments,
        total_due=receipt.total_due,
        balance=receipt.balance,
    )


def find_receipt(db: Session, contract_id: int, month: int, year: int) -> Receipt | None:
    """Get the issued receipt for a contract's month, if any."""
    return (
        db.query(Receipt)
        .filter(
            and_(
                Receipt.contract_id == contract_id,
                Receipt.month == month,
                Receipt.year == year,
            )
        )
        .first()
    )


def preview_receipt(
    db: Session,
    contract_id: int,
    month: int,
    year: int,
    calculator: ConsumptionCalculator | None = None,
) -> ReceiptResponse:
    """Return the issued receipt as stored, or a fresh unsaved calculation."""
    existing = find_receipt(db, contract_id, month, year)
    if existing:
        return receipt_to_response(existing)
    return calculate_receipt(db, contract_id, month, year, calculator)


def issue_receipt(
    db: Session,
    contract_id: int,
    month: int,
    year: int,
    calculator: ConsumptionCalculator | None = None,
) -> ReceiptResponse:
    """Recompute and persist a contract's receipt for a month.

    An existing receipt has its items, totals and snapshot fields
    overwritten while its status is kept. A new receipt starts as
    pending_review. A concurrent insert of the same receipt surfaces as 409
    so the caller can retry.
    """
    calculated = calculate_receipt(db, contract_id, month, year, calculator)

    receipt = find_receipt(db, contract_id, month, year)
    created = receipt is None
    if created:
        receipt = Receipt(
            contract_id=contract_id,
            month=month,
            year=year,
            status=ReceiptStatus.PENDING_REVIEW,
        )
        db.add(receipt)

    receipt.tenant_name = calculated.tenant_name
    receipt.department_name = calculated.department_name
    receipt.property_address = calculated.property_address
    receipt.period = calculated.period
    receipt.set_items([ReceiptItem(i.description, i.amount) for i in calculated.items])
    receipt.total_payments = calculated.total_payments
    receipt.total_due = calculated.total_due
    receipt.balance = calculated.balance

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Receipt for contract %s %02d/%d was issued concurrently", contract_id, month, year
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"Receipt for contract {contract_id} ({month}/{year}) "
                "was issued concurrently, retry"
            ),
        )
    db.refresh(receipt)

    logger.info(
        "Receipt %s for contract %s %02d/%d %s (status=%s, balance=%s)",
        receipt.id,
        contract_id,
        month,
        year,
        "created" if created else "recomputed",
        receipt.status.value,
        receipt.balance,
    )
    return receipt_to_response(receipt)


def update_receipt_status(
    db: Session,
    contract_id: int,
    month: int,
    year: int,
    new_status: ReceiptStatus,
) -> ReceiptResponse:
    """Move an issued receipt to another workflow state. Nothing else changes."""
    receipt = find_receipt(db, contract_id, month, year)
    if not receipt:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Issued receipt not found for contract {contract_id} ({month}/{year})",
        )

    previous = receipt.status
    receipt.status = new_status
    db.commit()
    db.refresh(receipt)

    logger.info(
        "Receipt %s status %s -> %s", receipt.id, previous.value, new_status.value
    )
    return receipt_to_response(receipt)


def list_receipts_for_contract(db: Session, contract_id: int) -> list[ReceiptResponse]:
    """All issued receipts of a contract, newest month first."""
    get_contract(db, contract_id)
    receipts = (
        db.query(Receipt)
        .filter(Receipt.contract_id == contract_id)
        .order_by(Receipt.year.desc(), Receipt.month.desc())
        .all()
    )
    return [receipt_to_response(r) for r in receipts]


def list_pending_payable(db: Session) -> list[ReceiptResponse]:
    """Approved receipts the tenant still owes money on (balance < 0)."""
    receipts = (
        db.query(Receipt)
        .filter(
            and_(
                Receipt.status == ReceiptStatus.APPROVED,
                Receipt.balance < 0,
            )
        )
        .order_by(Receipt.year.desc(), Receipt.month.desc())
        .all()
    )
    return [receipt_to_response(r) for r in receipts]
