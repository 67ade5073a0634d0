"""Booking service - Business logic for booking operations"""

import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...catalog import MAX_CUSTOMERS_PER_DAY, MAX_PACKAGES_PER_DAY, RESERVATION_FEE
from ...models import Booking, Customer
from ..customers.repository import CustomerRepository
from .capacity import DailyCapacity, group_bookings_by_date, summarize_day, would_exceed_capacity
from .repository import BookingRepository
from .schemas import BookingSubmission

logger = logging.getLogger(__name__)

STATUS_RESERVATION_PAID = "reservation_paid"
STATUS_COMPLETED = "completed"


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session, enforce_capacity: bool = False):
        self.db = db
        self.enforce_capacity = enforce_capacity
        self.repo = BookingRepository()
        self.customers = CustomerRepository()

    def get_bookings(self) -> list[Booking]:
        return self.repo.get_bookings(self.db)

    def get_bookings_for_day(self, day: date) -> list[Booking]:
        return self.repo.get_bookings_for_day(self.db, day)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def check_availability(self, day: date) -> dict:
        total_customers, total_packages = summarize_day(self.get_bookings_for_day(day))
        return {
            "available": total_customers < MAX_CUSTOMERS_PER_DAY
            and total_packages < MAX_PACKAGES_PER_DAY,
            "totalCustomers": total_customers,
            "totalPackages": total_packages,
            "maxCustomers": MAX_CUSTOMERS_PER_DAY,
            "maxPackages": MAX_PACKAGES_PER_DAY,
        }

    def get_schedule(self) -> list[DailyCapacity]:
        return group_bookings_by_date(self.get_bookings())

    def _find_or_create_customer(self, data: BookingSubmission) -> Customer:
        customer = self.customers.get_customer_by_email(self.db, data.customer.email)
        if customer:
            return customer

        logger.info(f"📥 New customer from booking: {data.customer.email}")
        return self.customers.create_customer(
            self.db,
            commit=False,
            first_name=data.customer.firstName,
            last_name=data.customer.lastName,
            full_name=data.customer.fullName,
            email=data.customer.email,
            phone=data.customer.phone,
            street_address=data.customer.streetAddress,
            city=data.customer.city,
            postal_code=data.customer.postalCode.upper(),
        )

    def create_booking(self, data: BookingSubmission) -> Booking:
        """
        Persist a booking submitted from checkout.

        serviceTotal is stored as sent; the reservation fee is added on top for
        the total amount. Daily capacity is only enforced when enabled.
        """
        # Keep the client's wall-clock time; the calendar day is what matters
        booking_date = data.bookingDate.replace(tzinfo=None)
        new_package_count = sum(pkg.quantity for pkg in data.packages)

        if self.enforce_capacity:
            existing = self.get_bookings_for_day(booking_date.date())
            rejection = would_exceed_capacity(existing, new_package_count)
            if rejection:
                logger.warning(f"⚠️ Capacity reached for {booking_date.date()}: {rejection}")
                raise HTTPException(status_code=400, detail=rejection)

        line_total = sum(pkg.finalPrice * pkg.quantity for pkg in data.packages)
        if line_total != data.serviceTotal:
            logger.warning(
                f"⚠️ serviceTotal {data.serviceTotal} does not match package lines ({line_total}) "
                f"for {data.customer.email}; storing submitted value"
            )

        try:
            customer = self._find_or_create_customer(data)
            booking = self.repo.create_booking(
                self.db,
                customer,
                packages=[
                    {
                        "package_id": pkg.packageId,
                        "package_name": pkg.packageName,
                        "vehicle_type": pkg.vehicleType,
                        "base_price": pkg.basePrice,
                        "final_price": pkg.finalPrice,
                        "quantity": pkg.quantity,
                    }
                    for pkg in data.packages
                ],
                booking_date=booking_date,
                booking_time=data.bookingTime,
                payment_method=data.paymentMethod,
                reservation_fee=RESERVATION_FEE,
                service_total=data.serviceTotal,
                total_amount=data.serviceTotal + RESERVATION_FEE,
                payment_status=STATUS_RESERVATION_PAID,
                message=data.message or None,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Booking error: {e}")
            raise HTTPException(status_code=500, detail="Failed to create booking") from e

        logger.info(
            f"✅ Booking {booking.id} created for {customer.email} on {booking_date.date()} "
            f"(${booking.total_amount})"
        )
        return booking

    def complete_booking(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)
        logger.info(f"✅ Marking booking {booking.id} as completed")
        return self.repo.set_payment_status(self.db, booking, STATUS_COMPLETED)
