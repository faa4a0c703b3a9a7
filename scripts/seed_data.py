"""Seed script to populate the database with sample data."""

import logging
from datetime import date
from decimal import Decimal

import rental_billing.models  # noqa: F401
from rental_billing.core.config import settings
from rental_billing.core.database import Base, SessionLocal, engine
from rental_billing.core.logging import setup_logging
from rental_billing.models import (
    Contract,
    Department,
    DepartmentMeter,
    ExtraCharge,
    MeterReading,
    MeterType,
    Payment,
    PaymentType,
    Property,
    Tenant,
)
from rental_billing.services.receipt import month_bounds

logger = logging.getLogger("seed_data")


def seed_database() -> None:
    """Seed the database with one rented department and three months of data."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Property).first():
            logger.info("Database already has data. Skipping seed.")
            return

        logger.info("Seeding database...")

        building = Property(
            name="Test Building",
            address="123 Main Street",
            light_cost_per_unit=Decimal("0.25"),
            water_cost_per_unit=Decimal("0.15"),
        )
        department = Department(
            name="Apt 101",
            floor=1,
            number_of_rooms=2,
            parent_property=building,
            is_available=False,
        )
        tenant = Tenant(name="Ana Perez", email="ana@example.com", phone="555-0100")
        contract = Contract(
            tenant=tenant,
            department=department,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            rent_amount=Decimal("1000.00"),
            advance_payment=Decimal("1000.00"),
            guarantee_deposit=Decimal("1000.00"),
        )
        db.add_all([building, department, tenant, contract])
        db.flush()

        light = DepartmentMeter(department_id=department.id, meter_type=MeterType.LIGHT)
        water = DepartmentMeter(department_id=department.id, meter_type=MeterType.WATER)
        db.add_all([light, water])
        db.flush()

        # Readings on the first and last day of each month
        light_value = Decimal("1000")
        water_value = Decimal("200")
        for month, (light_used, water_used) in enumerate([(120, 8), (95, 7), (140, 9)], start=1):
            month_start, month_end = month_bounds(month, 2024)
            db.add(MeterReading(meter_id=light.id, reading=light_value, reading_date=month_start))
            db.add(MeterReading(meter_id=water.id, reading=water_value, reading_date=month_start))
            light_value += light_used
            water_value += water_used
            db.add(MeterReading(meter_id=light.id, reading=light_value, reading_date=month_end))
            db.add(MeterReading(meter_id=water.id, reading=water_value, reading_date=month_end))

            db.add(
                Payment(
                    contract_id=contract.id,
                    amount=Decimal("1000.00"),
                    payment_date=date(2024, month, 5),
                    payment_type=PaymentType.RENT,
                    description=f"Rent {month}/2024",
                )
            )

        db.add(
            ExtraCharge(
                contract_id=contract.id,
                description="Common area cleaning",
                amount=Decimal("25.00"),
                month=2,
                year=2024,
            )
        )

        db.commit()
        logger.info(
            "Created property %s, department %s, contract %s",
            building.id,
            department.id,
            contract.id,
        )
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    seed_database()
