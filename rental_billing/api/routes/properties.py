"""Property and department routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rental_billing.core.database import get_db
from rental_billing.schemas.meter import MeterResponse
from rental_billing.schemas.property import (
    DepartmentCreate,
    DepartmentResponse,
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
)
from rental_billing.services import meter as meter_service
from rental_billing.services import property as property_service

router = APIRouter(tags=["properties"])


@router.post(
    "/properties/",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
):
    """Create a new property."""
    return property_service.create_property(db, property_data)


@router.get("/properties/", response_model=list[PropertyResponse])
def list_properties(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """List all properties."""
    return property_service.get_properties(db, skip, limit)


@router.get("/properties/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
):
    """Get a property by ID."""
    return property_service.get_property(db, property_id)


@router.patch("/properties/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    property_data: PropertyUpdate,
    db: Session = Depends(get_db),
):
    """Update a property. Rate changes apply to every later calculation."""
    return property_service.update_property(db, property_id, property_data)


@router.get("/properties/{property_id}/departments", response_model=list[DepartmentResponse])
def list_departments(
    property_id: int,
    db: Session = Depends(get_db),
):
    """List the departments of a property."""
    property_service.get_property(db, property_id)
    return property_service.get_departments_for_property(db, property_id)


@router.post(
    "/departments/",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_department(
    department_data: DepartmentCreate,
    db: Session = Depends(get_db),
):
    """Create a department inside a property."""
    return property_service.create_department(db, department_data)


@router.get("/departments/{department_id}", response_model=DepartmentResponse)
def get_department(
    department_id: int,
    db: Session = Depends(get_db),
):
    """Get a department by ID."""
    return property_service.get_department(db, department_id)


@router.get("/departments/{department_id}/meters", response_model=list[MeterResponse])
def list_department_meters(
    department_id: int,
    db: Session = Depends(get_db),
):
    """List the meters attached to a department."""
    property_service.get_department(db, department_id)
    return meter_service.get_meters_for_department(db, department_id)
