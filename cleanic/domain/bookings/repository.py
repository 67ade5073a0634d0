"""Booking repository - Database operations for bookings"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Booking, BookingPackage, Customer


def _with_relations(query):
    return query.options(joinedload(Booking.customer), selectinload(Booking.packages))


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_bookings(db: Session) -> list[Booking]:
        """All bookings, earliest booking date first"""
        return _with_relations(db.query(Booking)).order_by(Booking.booking_date.asc()).all()

    @staticmethod
    def get_bookings_for_day(db: Session, day: date) -> list[Booking]:
        """Bookings whose booking date falls on the given calendar day"""
        start = datetime.combine(day, time.min)
        end = start + timedelta(days=1)
        return (
            _with_relations(db.query(Booking))
            .filter(Booking.booking_date >= start, Booking.booking_date < end)
            .order_by(Booking.booking_date.asc())
            .all()
        )

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return _with_relations(db.query(Booking)).filter(Booking.id == booking_id).first()

    @staticmethod
    def create_booking(
        db: Session, customer: Customer, packages: list[dict], **booking_data
    ) -> Booking:
        """Create a booking and its package lines in one commit"""
        booking = Booking(customer=customer, **booking_data)
        for position, package_data in enumerate(packages):
            booking.packages.append(BookingPackage(position=position, **package_data))

        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def set_payment_status(db: Session, booking: Booking, payment_status: str) -> Booking:
        booking.payment_status = payment_status
        db.commit()
        db.refresh(booking)
        return booking
