"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...catalog import PAYMENT_METHODS
from ..customers.schemas import CustomerResponse, customer_response


class BookingCustomer(BaseModel):
    """Customer block of a booking submission"""

    firstName: str
    lastName: str = ""
    fullName: str
    email: str
    phone: str
    streetAddress: str
    city: str
    postalCode: str

    @field_validator("firstName", "fullName", "email", "phone", "streetAddress", "city", "postalCode")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        # Customers are matched by email when a booking comes in
        return v.lower()

    @field_validator("lastName")
    @classmethod
    def strip_last_name(cls, v):
        return v.strip()


class BookingPackageIn(BaseModel):
    packageId: str
    packageName: str
    vehicleType: str
    basePrice: int = Field(ge=0)
    finalPrice: int = Field(ge=0)
    quantity: int = Field(ge=1)

    @field_validator("packageId", mode="before")
    @classmethod
    def coerce_package_id(cls, v):
        return str(v)


class BookingSubmission(BaseModel):
    """Request body for POST /api/bookings"""

    customer: BookingCustomer
    bookingDate: datetime
    bookingTime: str
    paymentMethod: str
    serviceTotal: int
    packages: list[BookingPackageIn] = Field(min_length=1)
    message: Optional[str] = None

    @field_validator("paymentMethod")
    @classmethod
    def validate_payment_method(cls, v):
        if v not in PAYMENT_METHODS:
            raise ValueError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")
        return v


class BookingPackageResponse(BaseModel):
    id: str
    packageId: str
    packageName: str
    vehicleType: str
    basePrice: int
    finalPrice: int
    quantity: int


class BookingResponse(BaseModel):
    id: str
    customerId: str
    bookingDate: datetime
    bookingTime: str
    paymentMethod: str
    reservationFee: int
    serviceTotal: int
    totalAmount: int
    paymentStatus: str
    message: Optional[str] = None
    createdAt: Optional[datetime] = None
    customer: Optional[CustomerResponse] = None
    packages: list[BookingPackageResponse] = []


class BookingEnvelope(BaseModel):
    success: bool = True
    booking: BookingResponse
    message: Optional[str] = None


class BookingListEnvelope(BaseModel):
    success: bool = True
    bookings: list[BookingResponse]


class AvailabilityResponse(BaseModel):
    success: bool = True
    available: bool
    totalCustomers: int
    totalPackages: int
    maxCustomers: int
    maxPackages: int


class ScheduleDay(BaseModel):
    date: str
    totalCustomers: int
    totalPackages: int
    maxCustomers: int
    maxPackages: int
    isFull: bool
    bookings: list[BookingResponse]


class ScheduleEnvelope(BaseModel):
    success: bool = True
    days: list[ScheduleDay]


def booking_response(booking, include_customer: bool = True) -> BookingResponse:
    """Map a Booking row (with its package lines) to its camelCase API shape"""
    return BookingResponse(
        id=booking.id,
        customerId=booking.customer_id,
        bookingDate=booking.booking_date,
        bookingTime=booking.booking_time,
        paymentMethod=booking.payment_method,
        reservationFee=booking.reservation_fee,
        serviceTotal=booking.service_total,
        totalAmount=booking.total_amount,
        paymentStatus=booking.payment_status,
        message=booking.message,
        createdAt=booking.created_at,
        customer=customer_response(booking.customer) if include_customer else None,
        packages=[
            BookingPackageResponse(
                id=pkg.id,
                packageId=pkg.package_id,
                packageName=pkg.package_name,
                vehicleType=pkg.vehicle_type,
                basePrice=pkg.base_price,
                finalPrice=pkg.final_price,
                quantity=pkg.quantity,
            )
            for pkg in booking.packages
        ],
    )
