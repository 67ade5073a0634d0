"""Customer service - Business logic for customer operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate

logger = logging.getLogger(__name__)


def total_spent(customer: Customer) -> int:
    """Sum of total amounts (service total + reservation fee) across bookings"""
    return sum(booking.total_amount for booking in customer.bookings)


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self) -> list[Customer]:
        return self.repo.get_customers(self.db)

    def get_customer(self, customer_id: str) -> Customer:
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def _ensure_email_available(self, email: str, customer_id: Optional[str] = None) -> None:
        existing = self.repo.get_customer_by_email(self.db, email)
        if existing and existing.id != customer_id:
            logger.warning(f"⚠️ Customer email already in use: {email}")
            raise HTTPException(status_code=400, detail="A customer with this email already exists")

    @staticmethod
    def _customer_fields(data: CustomerCreate) -> dict:
        return {
            "first_name": data.firstName,
            "last_name": data.lastName,
            "full_name": data.fullName or f"{data.firstName} {data.lastName}",
            "email": data.email,
            "phone": data.phone,
            "street_address": data.streetAddress,
            "city": data.city,
            "postal_code": data.postalCode,
        }

    def create_customer(self, data: CustomerCreate) -> Customer:
        logger.info(f"📥 Creating customer {data.email}")
        self._ensure_email_available(data.email)
        return self.repo.create_customer(self.db, **self._customer_fields(data))

    def update_customer(self, customer_id: str, data: CustomerCreate) -> Customer:
        customer = self.get_customer(customer_id)
        self._ensure_email_available(data.email, customer_id=customer.id)
        logger.info(f"✏️ Updating customer {customer.id}")
        return self.repo.update_customer(self.db, customer, **self._customer_fields(data))
