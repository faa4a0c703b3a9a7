"""Contract Pydantic schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class ContractCreate(BaseModel):
    """Schema for renting a department to a tenant."""

    tenant_id: int
    department_id: int
    start_date: date
    end_date: date
    rent_amount: Decimal = Field(ge=0)
    advance_payment: Decimal = Field(default=Decimal("0"), ge=0)
    guarantee_deposit: Decimal = Field(default=Decimal("0"), ge=0)

    @model_validator(mode="after")
    def check_dates(self) -> "ContractCreate":
        """Ensure the contract does not end before it starts."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ContractUpdate(BaseModel):
    """Schema for amending a contract's terms."""

    end_date: date | None = None
    rent_amount: Decimal | None = Field(default=None, ge=0)
    advance_payment: Decimal | None = Field(default=None, ge=0)
    guarantee_deposit: Decimal | None = Field(default=None, ge=0)


class ContractResponse(BaseModel):
    """Schema for contract response."""

    id: int
    tenant_id: int
    department_id: int
    start_date: date
    end_date: date
    rent_amount: Decimal
    advance_payment: Decimal
    guarantee_deposit: Decimal

    model_config = {"from_attributes": True}
