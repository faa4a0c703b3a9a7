"""Payment and extra charge routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.schemas.payment import (
    ExtraChargeCreate,
    ExtraChargeResponse,
    PaymentCreate,
    PaymentResponse,
)
from rental_billing.services import payment as payment_service

router = APIRouter(tags=["payments"])


@router.post("/payments/", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    payment_data: PaymentCreate,
    db: Session = Depends(get_db),
):
    """Record a payment on a contract."""
    return payment_service.create_payment(db, payment_data)


@router.get("/payments/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
):
    """Get a payment by ID."""
    return payment_service.get_payment(db, payment_id)


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(
    payment_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a payment recorded by mistake."""
    payment_service.delete_payment(db, payment_id)


@router.post(
    "/extra-charges/",
    response_model=ExtraChargeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_extra_charge(
    charge_data: ExtraChargeCreate,
    db: Session = Depends(get_db),
):
    """Add a one-off charge to a contract's month."""
    return payment_service.create_extra_charge(db, charge_data)


@router.get("/extra-charges/", response_model=list[ExtraChargeResponse])
def list_extra_charges(
    contract_id: int | None = None,
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = None,
    db: Session = Depends(get_db),
):
    """List extra charges, optionally filtered by contract and month."""
    return payment_service.get_extra_charges(db, contract_id, month, year)


@router.delete("/extra-charges/{charge_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_extra_charge(
    charge_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete an extra charge."""
    payment_service.delete_extra_charge(db, charge_id)
