"""Contract service.

A department holds at most one active contract. Creating a contract marks the
department unavailable and removing it marks the department available again;
both writes share one commit.
"""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from rental_billing.models.contract import Contract
from rental_billing.models.department import Department
from rental_billing.schemas.contract import ContractCreate, ContractUpdate
from rental_billing.services.property import get_department
from rental_billing.services.tenant import get_tenant

logger = logging.getLogger(__name__)


def create_contract(db: Session, contract_data: ContractCreate) -> Contract:
    """Rent a department to a tenant."""
    get_tenant(db, contract_data.tenant_id)
    department = get_department(db, contract_data.department_id)

    if not department.is_available:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Department '{department.name}' is not available for rent",
        )

    contract = Contract(**contract_data.model_dump())
    department.is_available = False
    db.add(contract)
    db.commit()
    db.refresh(contract)

    logger.info(
        "Contract %s created for department %s (tenant %s)",
        contract.id,
        department.id,
        contract.tenant_id,
    )
    return contract


def get_contract(db: Session, contract_id: int) -> Contract:
    """Get a contract by ID."""
    contract = db.query(Contract).filter(Contract.id == contract_id).first()
    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contract with ID {contract_id} not found",
        )
    return contract


def get_contract_with_parties(db: Session, contract_id: int) -> Contract:
    """Get a contract with its tenant, department and property loaded."""
    contract = (
        db.query(Contract)
        .options(
            joinedload(Contract.tenant),
            joinedload(Contract.department).joinedload(Department.parent_property),
        )
        .filter(Contract.id == contract_id)
        .first()
    )
    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contract with ID {contract_id} not found",
        )
    return contract


def get_contracts(db: Session, department_id: int | None = None) -> list[Contract]:
    """List contracts, optionally for a single department."""
    query = db.query(Contract)
    if department_id is not None:
        query = query.filter(Contract.department_id == department_id)
    return query.order_by(Contract.id).all()


def update_contract(
    db: Session,
    contract_id: int,
    contract_data: ContractUpdate,
) -> Contract:
    """Amend a contract's dates or amounts."""
    contract = get_contract(db, contract_id)

    update_data = contract_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(contract, field, value)

    if contract.end_date < contract.start_date:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )

    db.commit()
    db.refresh(contract)
    return contract


def delete_contract(db: Session, contract_id: int) -> None:
    """Remove a contract and free its department."""
    contract = get_contract(db, contract_id)
    department = contract.department
    department.is_available = True
    db.delete(contract)
    db.commit()

    logger.info("Contract %s removed, department %s available", contract_id, department.id)
