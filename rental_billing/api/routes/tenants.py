"""Tenant routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.schemas.tenant import TenantCreate, TenantResponse
from rental_billing.services import tenant as tenant_service

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("/", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    db: Session = Depends(get_db),
):
    """Register a tenant."""
    return tenant_service.create_tenant(db, tenant_data)


@router.get("/", response_model=list[TenantResponse])
def list_tenants(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """List tenants."""
    return tenant_service.get_tenants(db, skip, limit)


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: int,
    db: Session = Depends(get_db),
):
    """Get a tenant by ID."""
    return tenant_service.get_tenant(db, tenant_id)
