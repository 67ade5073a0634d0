"""Customer router - admin endpoints for customer records"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ..bookings.schemas import booking_response
from .schemas import (
    CustomerCreate,
    CustomerEnvelope,
    CustomerListEnvelope,
    CustomerStatsResponse,
    customer_response,
)
from .service import CustomerService, total_spent

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/customers", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.get("", response_model=CustomerListEnvelope)
async def get_customers(service: CustomerService = Depends(get_customer_service)):
    """All customers with lifetime spend and booking count"""
    customers = service.get_customers()
    return CustomerListEnvelope(
        customers=[
            CustomerStatsResponse(
                **customer_response(c).model_dump(),
                totalSpent=total_spent(c),
                bookingCount=len(c.bookings),
            )
            for c in customers
        ]
    )


@router.get("/{customer_id}")
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    """Customer details with booking history, newest first"""
    customer = service.get_customer(customer_id)
    details = customer_response(customer).model_dump(mode="json")
    details["totalSpent"] = total_spent(customer)
    details["bookings"] = [
        booking_response(b, include_customer=False).model_dump(mode="json", exclude={"customer"})
        for b in customer.bookings
    ]
    return {"success": True, "customer": details}


@router.post("", response_model=CustomerEnvelope)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    customer = service.create_customer(data)
    return CustomerEnvelope(
        customer=customer_response(customer), message="Customer added successfully!"
    )


@router.put("/{customer_id}", response_model=CustomerEnvelope)
async def update_customer(
    customer_id: str,
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    customer = service.update_customer(customer_id, data)
    return CustomerEnvelope(
        customer=customer_response(customer), message="Customer updated successfully!"
    )
