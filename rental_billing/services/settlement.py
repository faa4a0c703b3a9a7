"""Final settlement of a contract at move-out."""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from rental_billing.schemas.receipt import SettlementResult
from rental_billing.services.contract import get_contract_with_parties
from rental_billing.services.payment import get_payments_for_contract

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
DAYS_PER_MONTH = 30


def count_accrual_months(start_date: date, end_date: date) -> int:
    """Number of monthly rent accruals from start_date up to end_date inclusive.

    Rent accrues on start_date and on every monthly anniversary of it
    (day clamped to the end of shorter months) that falls on or before
    end_date. A month that is only partly occupied is charged in full.
    """
    if end_date < start_date:
        return 0
    months = (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month)
    if start_date + relativedelta(months=months) > end_date:
        months -= 1
    return months + 1


def calculate_final_settlement(
    db: Session,
    contract_id: int,
    actual_end_date: date,
) -> SettlementResult:
    """Compute what is owed when a contract closes on actual_end_date.

    Rent accrues monthly up to the later of actual_end_date and the
    contract's end date. Every payment ever made on the contract counts.
    Days past the contract's end date are charged at rent / 30 per day,
    capped at the guarantee deposit.
    """
    contract = get_contract_with_parties(db, contract_id)
    rent = Decimal(contract.rent_amount)

    effective_end_date = max(actual_end_date, contract.end_date)
    months_charged = count_accrual_months(contract.start_date, effective_end_date)
    total_charges = rent * months_charged

    total_payments = sum(
        (Decimal(p.amount) for p in get_payments_for_contract(db, contract.id)),
        Decimal("0"),
    )

    daily_rent = rent / DAYS_PER_MONTH
    days_overstayed = 0
    guarantee_deduction = Decimal("0")
    if actual_end_date > contract.end_date:
        days_overstayed = (actual_end_date - contract.end_date).days
        guarantee_deduction = min(
            (daily_rent * days_overstayed).quantize(CENTS, rounding=ROUND_HALF_UP),
            Decimal(contract.guarantee_deposit),
        )
        total_charges += guarantee_deduction

    # TODO: apply the advance payment once its use at move-out is defined
    advance_payment_used = False

    total_charges = total_charges.quantize(CENTS, rounding=ROUND_HALF_UP)
    total_payments = total_payments.quantize(CENTS, rounding=ROUND_HALF_UP)
    final_balance = total_payments - total_charges

    logger.info(
        "Settlement for contract %s at %s: months=%d overstay=%d days charges=%s "
        "payments=%s balance=%s",
        contract.id,
        actual_end_date,
        months_charged,
        days_overstayed,
        total_charges,
        total_payments,
        final_balance,
    )

    return SettlementResult(
        contract_id=contract.id,
        tenant_name=contract.tenant.name,
        department_name=contract.department.name,
        property_address=contract.department.parent_property.address,
        contract_start_date=contract.start_date,
        contract_end_date=contract.end_date,
        actual_end_date=actual_end_date,
        months_charged=months_charged,
        days_overstayed=days_overstayed,
        daily_rent=daily_rent.quantize(CENTS, rounding=ROUND_HALF_UP),
        total_charges=total_charges,
        total_payments=total_payments,
        advance_payment_used=advance_payment_used,
        guarantee_deduction=guarantee_deduction.quantize(CENTS, rounding=ROUND_HALF_UP),
        final_balance=final_balance,
    )
