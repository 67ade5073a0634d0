"""Customer domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import normalize_postal_code, require_text, validate_email


class CustomerCreate(BaseModel):
    """Schema for creating or fully updating a customer from the admin dashboard"""

    firstName: str
    lastName: str
    fullName: Optional[str] = None
    email: str
    phone: str
    streetAddress: str
    city: str
    postalCode: str

    @field_validator("firstName")
    @classmethod
    def validate_first_name(cls, v):
        return require_text(v, "first name")

    @field_validator("lastName")
    @classmethod
    def validate_last_name(cls, v):
        return require_text(v, "last name")

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(require_text(v, "email"))

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return require_text(v, "phone number")

    @field_validator("streetAddress")
    @classmethod
    def validate_street_address(cls, v):
        return require_text(v, "street address")

    @field_validator("city")
    @classmethod
    def validate_city(cls, v):
        return require_text(v, "city")

    @field_validator("postalCode")
    @classmethod
    def validate_postal_code(cls, v):
        return normalize_postal_code(require_text(v, "postal code"))

    @field_validator("fullName")
    @classmethod
    def strip_full_name(cls, v):
        if v is not None and v.strip():
            return v.strip()
        return None


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    id: str
    firstName: str
    lastName: str
    fullName: str
    email: str
    phone: str
    streetAddress: str
    city: str
    postalCode: str
    createdAt: Optional[datetime] = None


class CustomerStatsResponse(CustomerResponse):
    totalSpent: int = 0
    bookingCount: int = 0


class CustomerEnvelope(BaseModel):
    success: bool = True
    customer: CustomerResponse
    message: Optional[str] = None


class CustomerListEnvelope(BaseModel):
    success: bool = True
    customers: list[CustomerStatsResponse]


def customer_response(customer) -> CustomerResponse:
    """Map a Customer row to its camelCase API shape"""
    return CustomerResponse(
        id=customer.id,
        firstName=customer.first_name,
        lastName=customer.last_name,
        fullName=customer.full_name,
        email=customer.email,
        phone=customer.phone,
        streetAddress=customer.street_address,
        city=customer.city,
        postalCode=customer.postal_code,
        createdAt=customer.created_at,
    )
