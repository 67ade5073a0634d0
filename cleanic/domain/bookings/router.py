"""Booking router - public booking endpoints and the admin booking views"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...config import ENFORCE_DAILY_CAPACITY
from ...database import get_db
from ...shared.validators import parse_calendar_date
from .schemas import (
    AvailabilityResponse,
    BookingEnvelope,
    BookingListEnvelope,
    BookingSubmission,
    ScheduleDay,
    ScheduleEnvelope,
    booking_response,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, enforce_capacity=ENFORCE_DAILY_CAPACITY)


def _parse_day(value: str):
    try:
        return parse_calendar_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}") from None


# ============================================================================
# PUBLIC BOOKING ENDPOINTS
# ============================================================================


@router.post("", response_model=BookingEnvelope)
async def create_booking(
    data: BookingSubmission,
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking from the mobile checkout"""
    booking = service.create_booking(data)
    return BookingEnvelope(booking=booking_response(booking), message="Booking created successfully!")


@router.get("/availability/{date}", response_model=AvailabilityResponse)
async def check_availability(
    date: str,
    service: BookingService = Depends(get_booking_service),
):
    """Customers and packages already booked on a day, against the daily capacity"""
    return AvailabilityResponse(**service.check_availability(_parse_day(date)))


# ============================================================================
# ADMIN ENDPOINTS
# ============================================================================


@admin_router.get("/bookings", response_model=BookingListEnvelope)
async def get_bookings(service: BookingService = Depends(get_booking_service)):
    """All bookings with customer and packages, earliest first"""
    return BookingListEnvelope(bookings=[booking_response(b) for b in service.get_bookings()])


@admin_router.get("/bookings/date/{date}", response_model=BookingListEnvelope)
async def get_bookings_for_date(
    date: str,
    service: BookingService = Depends(get_booking_service),
):
    bookings = service.get_bookings_for_day(_parse_day(date))
    return BookingListEnvelope(bookings=[booking_response(b) for b in bookings])


@admin_router.put("/bookings/{booking_id}/complete", response_model=BookingEnvelope)
async def complete_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
):
    booking = service.complete_booking(booking_id)
    return BookingEnvelope(booking=booking_response(booking), message="Booking marked as completed")


@admin_router.get("/schedule", response_model=ScheduleEnvelope)
async def get_schedule(service: BookingService = Depends(get_booking_service)):
    """Bookings grouped per day with customer/package counts against the daily capacity"""
    return ScheduleEnvelope(
        days=[
            ScheduleDay(
                date=day.day.isoformat(),
                totalCustomers=day.total_customers,
                totalPackages=day.total_packages,
                maxCustomers=day.max_customers,
                maxPackages=day.max_packages,
                isFull=day.is_full,
                bookings=[booking_response(b) for b in day.bookings],
            )
            for day in service.get_schedule()
        ]
    )
