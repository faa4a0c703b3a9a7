"""Property and department services."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from rental_billing.models.department import Department
from rental_billing.models.property import Property
from rental_billing.schemas.property import DepartmentCreate, PropertyCreate, PropertyUpdate


def create_property(db: Session, property_data: PropertyCreate) -> Property:
    """Create a new property."""
    db_property = Property(**property_data.model_dump())
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    return db_property


def get_property(db: Session, property_id: int) -> Property:
    """Get a property by ID."""
    db_property = db.query(Property).filter(Property.id == property_id).first()
    if not db_property:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )
    return db_property


def get_properties(db: Session, skip: int = 0, limit: int = 100) -> list[Property]:
    """Get all properties with pagination."""
    return db.query(Property).order_by(Property.id).offset(skip).limit(limit).all()


def update_property(
    db: Session,
    property_id: int,
    property_data: PropertyUpdate,
) -> Property:
    """Update a property, including its utility rates."""
    db_property = get_property(db, property_id)

    update_data = property_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_property, field, value)

    db.commit()
    db.refresh(db_property)
    return db_property


def create_department(db: Session, department_data: DepartmentCreate) -> Department:
    """Create a department inside an existing property."""
    get_property(db, department_data.property_id)

    db_department = Department(**department_data.model_dump())
    db.add(db_department)
    db.commit()
    db.refresh(db_department)
    return db_department


def get_department(db: Session, department_id: int) -> Department:
    """Get a department by ID."""
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )
    return department


def get_departments_for_property(db: Session, property_id: int) -> list[Department]:
    """Get all departments of a property."""
    return (
        db.query(Department)
        .filter(Department.property_id == property_id)
        .order_by(Department.id)
        .all()
    )
