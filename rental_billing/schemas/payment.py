"""Payment and extra charge Pydantic schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from rental_billing.models.enums import PaymentType


class PaymentCreate(BaseModel):
    """Schema for recording a payment on a contract."""

    contract_id: int
    amount: Decimal = Field(gt=0)
    payment_date: date
    payment_type: PaymentType
    description: str | None = None


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    id: int
    contract_id: int
    amount: Decimal
    payment_date: date
    payment_type: PaymentType
    description: str | None

    model_config = {"from_attributes": True}


class ExtraChargeCreate(BaseModel):
    """Schema for adding a one-off charge to a contract's month."""

    contract_id: int
    description: str
    amount: Decimal = Field(gt=0)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=9999)


class ExtraChargeResponse(BaseModel):
    """Schema for extra charge response."""

    id: int
    contract_id: int
    description: str
    amount: Decimal
    month: int
    year: int

    model_config = {"from_attributes": True}
