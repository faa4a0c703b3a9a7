"""Payment ledger and extra charge services."""

from datetime import date

from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.orm import Session

from rental_billing.models.charge import ExtraCharge
from rental_billing.models.payment import Payment
from rental_billing.schemas.payment import ExtraChargeCreate, PaymentCreate
from rental_billing.services.contract import get_contract


def create_payment(db: Session, payment_data: PaymentCreate) -> Payment:
    """Record a payment on an existing contract."""
    get_contract(db, payment_data.contract_id)

    payment = Payment(**payment_data.model_dump())
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return payment


def get_payment(db: Session, payment_id: int) -> Payment:
    """Get a payment by ID."""
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    return payment


def delete_payment(db: Session, payment_id: int) -> None:
    """Delete a payment recorded by mistake."""
    payment = get_payment(db, payment_id)
    db.delete(payment)
    db.commit()


def get_payments_for_contract(db: Session, contract_id: int) -> list[Payment]:
    """All payments ever made on a contract, oldest first."""
    return (
        db.query(Payment)
        .filter(Payment.contract_id == contract_id)
        .order_by(Payment.payment_date, Payment.id)
        .all()
    )


def get_payments_in_period(
    db: Session,
    contract_id: int,
    start_date: date,
    end_date: date,
) -> list[Payment]:
    """Payments on a contract dated within [start_date, end_date]."""
    return (
        db.query(Payment)
        .filter(
            and_(
                Payment.contract_id == contract_id,
                Payment.payment_date >= start_date,
                Payment.payment_date <= end_date,
            )
        )
        .order_by(Payment.payment_date, Payment.id)
        .all()
    )


def create_extra_charge(db: Session, charge_data: ExtraChargeCreate) -> ExtraCharge:
    """Add a one-off charge to a contract's month."""
    get_contract(db, charge_data.contract_id)

    charge = ExtraCharge(**charge_data.model_dump())
    db.add(charge)
    db.commit()
    db.refresh(charge)
    return charge


def get_extra_charge(db: Session, charge_id: int) -> ExtraCharge:
    """Get an extra charge by ID."""
    charge = db.query(ExtraCharge).filter(ExtraCharge.id == charge_id).first()
    if not charge:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Extra charge not found",
        )
    return charge


def delete_extra_charge(db: Session, charge_id: int) -> None:
    """Delete an extra charge."""
    charge = get_extra_charge(db, charge_id)
    db.delete(charge)
    db.commit()


def get_extra_charges(
    db: Session,
    contract_id: int | None = None,
    month: int | None = None,
    year: int | None = None,
) -> list[ExtraCharge]:
    """List extra charges, filtered by any of contract, month and year."""
    query = db.query(ExtraCharge)
    if contract_id is not None:
        query = query.filter(ExtraCharge.contract_id == contract_id)
    if month is not None:
        query = query.filter(ExtraCharge.month == month)
    if year is not None:
        query = query.filter(ExtraCharge.year == year)
    return query.order_by(ExtraCharge.id).all()
