"""Contract routes, including monthly receipts and final settlement."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.schemas.contract import ContractCreate, ContractResponse, ContractUpdate
from rental_billing.schemas.receipt import ReceiptResponse, ReceiptStatusUpdate, SettlementResult
from rental_billing.services import contract as contract_service
from rental_billing.services import receipt as receipt_service
from rental_billing.services import settlement as settlement_service

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("/receipts/pending", response_model=list[ReceiptResponse])
def list_pending_receipts(db: Session = Depends(get_db)):
    """Approved receipts with a negative balance, i.e. money still owed."""
    return receipt_service.list_pending_payable(db)


@router.post("/", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(
    contract_data: ContractCreate,
    db: Session = Depends(get_db),
):
    """Rent a department to a tenant. The department must be available."""
    return contract_service.create_contract(db, contract_data)


@router.get("/", response_model=list[ContractResponse])
def list_contracts(
    department_id: int | None = None,
    db: Session = Depends(get_db),
):
    """List contracts, optionally for one department."""
    return contract_service.get_contracts(db, department_id)


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: int,
    db: Session = Depends(get_db),
):
    """Get a contract by ID."""
    return contract_service.get_contract(db, contract_id)


@router.patch("/{contract_id}", response_model=ContractResponse)
def update_contract(
    contract_id: int,
    contract_data: ContractUpdate,
    db: Session = Depends(get_db),
):
    """Amend a contract's dates or amounts."""
    return contract_service.update_contract(db, contract_id, contract_data)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contract(
    contract_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Remove a contract and make its department available again."""
    contract_service.delete_contract(db, contract_id)


@router.get("/{contract_id}/receipt", response_model=ReceiptResponse)
def preview_receipt(
    contract_id: int,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    db: Session = Depends(get_db),
):
    """Show the month's receipt.

    Returns the issued receipt unchanged if there is one, otherwise a fresh
    calculation that is not saved.
    """
    return receipt_service.preview_receipt(db, contract_id, month, year)


@router.post("/{contract_id}/receipt", response_model=ReceiptResponse)
def issue_receipt(
    contract_id: int,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    db: Session = Depends(get_db),
):
    """Recompute and save the month's receipt, keeping its current status."""
    return receipt_service.issue_receipt(db, contract_id, month, year)


@router.patch("/{contract_id}/receipt/status", response_model=ReceiptResponse)
def update_receipt_status(
    contract_id: int,
    status_data: ReceiptStatusUpdate,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    db: Session = Depends(get_db),
):
    """Approve, deny or send an issued receipt back to review."""
    return receipt_service.update_receipt_status(
        db, contract_id, month, year, status_data.status
    )


@router.get("/{contract_id}/receipts", response_model=list[ReceiptResponse])
def list_contract_receipts(
    contract_id: int,
    db: Session = Depends(get_db),
):
    """All issued receipts of a contract, newest month first."""
    return receipt_service.list_receipts_for_contract(db, contract_id)


@router.get("/{contract_id}/settlement", response_model=SettlementResult)
def calculate_settlement(
    contract_id: int,
    actual_end_date: date = Query(..., description="Day the tenant actually left"),
    db: Session = Depends(get_db),
):
    """Final balance if the contract closes on actual_end_date."""
    return settlement_service.calculate_final_settlement(db, contract_id, actual_end_date)
