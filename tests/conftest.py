"""Shared fixtures: an in-memory database and small record factories."""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable, Iterator  # noqa: E402
from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from rental_billing.core.database import Base, get_db  # noqa: E402
from rental_billing.main import app  # noqa: E402
from rental_billing.models import (  # noqa: E402
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
from rental_billing.services.consumption import ConsumptionCalculator, RateDefaults  # noqa: E402

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db() -> Iterator[Session]:
    """A fresh database per test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db: Session) -> Iterator[TestClient]:
    """Test client whose requests share the test's database session."""

    def override_get_db() -> Iterator[Session]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def calculator(db: Session) -> ConsumptionCalculator:
    """Calculator with the stock fallback rates."""
    return ConsumptionCalculator(db, RateDefaults(light=Decimal("0.25"), water=Decimal("0.15")))


@pytest.fixture
def make_contract(db: Session) -> Callable[..., Contract]:
    """Factory: a contract on a fresh property, department and tenant."""
    counter = {"n": 0}

    def _make(
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 12, 31),
        rent_amount: str = "1000.00",
        guarantee_deposit: str = "500.00",
        light_rate: str | None = "0.25",
        water_rate: str | None = "0.15",
    ) -> Contract:
        counter["n"] += 1
        n = counter["n"]
        prop = Property(
            name=f"Building {n}",
            address=f"{n} Main Street",
            light_cost_per_unit=Decimal(light_rate) if light_rate is not None else None,
            water_cost_per_unit=Decimal(water_rate) if water_rate is not None else None,
        )
        department = Department(name=f"Apt {n}01", floor=1, parent_property=prop, is_available=False)
        tenant = Tenant(name=f"Tenant {n}", email=f"tenant{n}@example.com")
        contract = Contract(
            tenant=tenant,
            department=department,
            start_date=start_date,
            end_date=end_date,
            rent_amount=Decimal(rent_amount),
            advance_payment=Decimal(rent_amount),
            guarantee_deposit=Decimal(guarantee_deposit),
        )
        db.add_all([prop, department, tenant, contract])
        db.commit()
        db.refresh(contract)
        return contract

    return _make


@pytest.fixture
def add_meter(db: Session) -> Callable[..., DepartmentMeter]:
    """Factory: a meter with readings given as (date, value) pairs."""

    def _add(
        department_id: int,
        meter_type: MeterType,
        readings: list[tuple[date, str]] = (),
    ) -> DepartmentMeter:
        meter = DepartmentMeter(department_id=department_id, meter_type=meter_type)
        db.add(meter)
        db.flush()
        for reading_date, value in readings:
            db.add(MeterReading(meter_id=meter.id, reading=Decimal(value), reading_date=reading_date))
        db.commit()
        db.refresh(meter)
        return meter

    return _add


@pytest.fixture
def add_payment(db: Session) -> Callable[..., Payment]:
    """Factory: a payment on a contract."""

    def _add(
        contract_id: int,
        amount: str,
        payment_date: date,
        payment_type: PaymentType = PaymentType.RENT,
        description: str | None = None,
    ) -> Payment:
        payment = Payment(
            contract_id=contract_id,
            amount=Decimal(amount),
            payment_date=payment_date,
            payment_type=payment_type,
            description=description,
        )
        db.add(payment)
        db.commit()
        return payment

    return _add


@pytest.fixture
def add_extra_charge(db: Session) -> Callable[..., ExtraCharge]:
    """Factory: an extra charge on a contract's month."""

    def _add(contract_id: int, description: str, amount: str, month: int, year: int) -> ExtraCharge:
        charge = ExtraCharge(
            contract_id=contract_id,
            description=description,
            amount=Decimal(amount),
            month=month,
            year=year,
        )
        db.add(charge)
        db.commit()
        return charge

    return _add
