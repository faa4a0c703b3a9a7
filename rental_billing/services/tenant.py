"""Tenant service."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from rental_billing.models.tenant import Tenant
from rental_billing.schemas.tenant import TenantCreate


def create_tenant(db: Session, tenant_data: TenantCreate) -> Tenant:
    """Register a tenant. Emails are unique."""
    existing = db.query(Tenant).filter(Tenant.email == tenant_data.email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tenant with email '{tenant_data.email}' already exists",
        )

    tenant = Tenant(**tenant_data.model_dump())
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def get_tenant(db: Session, tenant_id: int) -> Tenant:
    """Get a tenant by ID."""
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )
    return tenant


def get_tenants(db: Session, skip: int = 0, limit: int = 100) -> list[Tenant]:
    """Get all tenants with pagination."""
    return db.query(Tenant).order_by(Tenant.id).offset(skip).limit(limit).all()
