"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Booking, Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session) -> list[Customer]:
        """Get all customers with their bookings loaded"""
        return (
            db.query(Customer)
            .options(selectinload(Customer.bookings).selectinload(Booking.packages))
            .order_by(Customer.created_at.desc())
            .all()
        )

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: str) -> Optional[Customer]:
        return (
            db.query(Customer)
            .options(selectinload(Customer.bookings).selectinload(Booking.packages))
            .filter(Customer.id == customer_id)
            .first()
        )

    @staticmethod
    def get_customer_by_email(db: Session, email: str) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.email == email).first()

    @staticmethod
    def create_customer(db: Session, commit: bool = True, **customer_data) -> Customer:
        """Create a new customer; commit=False leaves it pending in the session"""
        customer = Customer(**customer_data)
        db.add(customer)
        if commit:
            db.commit()
            db.refresh(customer)
        else:
            db.flush()
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer
