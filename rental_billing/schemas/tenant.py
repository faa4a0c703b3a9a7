"""Tenant Pydantic schemas."""

from pydantic import BaseModel, field_validator


class TenantCreate(BaseModel):
    """Schema for registering a tenant."""

    name: str
    email: str
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a minimally plausible email address."""
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Invalid email address")
        return v


class TenantResponse(BaseModel):
    """Schema for tenant response."""

    id: int
    name: str
    email: str
    phone: str | None

    model_config = {"from_attributes": True}
