import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a unique string ID for customers, bookings and booking lines"""
    return str(uuid.uuid4())


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False, default="")
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=False)
    street_address = Column(String(500), nullable=False)
    city = Column(String(255), nullable=False)
    postal_code = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    bookings = relationship(
        "Booking",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="desc(Booking.booking_date)",
    )


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    # Wall-clock date-time as submitted by the client; grouping uses its date portion
    booking_date = Column(DateTime, nullable=False, index=True)
    booking_time = Column(String(20), nullable=False)  # Display string, e.g. "7:30 AM"
    payment_method = Column(String(20), nullable=False)  # credit_card, e_transfer
    reservation_fee = Column(Integer, nullable=False, default=30)
    service_total = Column(Integer, nullable=False)
    total_amount = Column(Integer, nullable=False)  # service_total + reservation_fee
    payment_status = Column(
        String(50), nullable=False, default="reservation_paid"
    )  # reservation_paid, completed
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Customer", back_populates="bookings")
    packages = relationship(
        "BookingPackage",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingPackage.position",
    )


class BookingPackage(Base):
    __tablename__ = "booking_packages"

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Order within the submission
    package_id = Column(String(50), nullable=False)
    package_name = Column(String(255), nullable=False)
    vehicle_type = Column(String(20), nullable=False)
    base_price = Column(Integer, nullable=False)
    final_price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    booking = relationship("Booking", back_populates="packages")
