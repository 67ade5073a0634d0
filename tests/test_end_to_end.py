"""Checkout against the real booking API, in-process."""

from datetime import datetime

import httpx
import pytest

from cleanic.client.api import BookingApiClient
from cleanic.client.checkout import CheckoutAggregator, CheckoutForm
from cleanic.domain.bookings.capacity import group_bookings_by_date
from cleanic.main import app
from cleanic.models import Booking


@pytest.fixture
def backend(override_db):
    return BookingApiClient("http://testserver", transport=httpx.ASGITransport(app=app))


def checkout_form(**overrides):
    fields = {
        "full_name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "514-555-0199",
        "street_address": "123 Main Street",
        "city": "Montreal",
        "postal_code": "H1A 1A1",
        "booking_date": datetime(2026, 10, 20, 7, 30),
        "booking_time": "7:30 AM",
        "payment_method": "e_transfer",
    }
    fields.update(overrides)
    return CheckoutForm(**fields)


class TestCheckoutToBackend:
    @pytest.mark.asyncio
    async def test_interior_premium_e_transfer(self, backend, cart, db_session):
        """One Interior Premium on a sedan books for 189 and empties the cart."""
        cart.add_item(
            {
                "packageId": "2",
                "packageName": "Interior Premium",
                "basePrice": 189,
                "vehicleType": "sedan",
                "finalPrice": 189,
                "quantity": 1,
            }
        )

        result = await CheckoutAggregator(cart, backend).submit(checkout_form())

        assert result.ok, result.message
        assert result.totals.due_today == 30
        assert result.totals.due_later == 159
        assert cart.items == ()

        booking = db_session.query(Booking).one()
        assert booking.service_total == 189
        assert booking.payment_method == "e_transfer"
        assert booking.total_amount == 219
        assert booking.customer.first_name == "Jane"
        assert booking.customer.last_name == "Doe"

    @pytest.mark.asyncio
    async def test_admin_view_groups_client_side(self, backend, cart):
        for hour in (8, 14):
            cart.add_item(
                {
                    "packageId": "1",
                    "packageName": "Interior Basic",
                    "basePrice": 99,
                    "vehicleType": "suv",
                    "finalPrice": 124,
                    "quantity": 1,
                }
            )
            form = checkout_form(
                email=f"guest{hour}@example.com", booking_date=datetime(2026, 10, 22, hour)
            )
            assert (await CheckoutAggregator(cart, backend).submit(form)).ok

        bookings = (await backend.list_bookings())["bookings"]
        days = group_bookings_by_date(bookings)

        assert len(days) == 1
        assert (days[0].total_customers, days[0].total_packages) == (2, 2)
        assert days[0].is_full

    @pytest.mark.asyncio
    async def test_customer_admin_calls(self, backend):
        created = await backend.create_customer(
            {
                "firstName": "Lea",
                "lastName": "Roy",
                "email": "lea@example.com",
                "phone": "514-555-0111",
                "streetAddress": "1 Rue Principale",
                "city": "Quebec",
                "postalCode": "G1A 0A1",
            }
        )
        customer_id = created["customer"]["id"]

        fetched = await backend.get_customer(customer_id)
        missing = await backend.get_customer("missing")

        assert fetched["customer"]["fullName"] == "Lea Roy"
        assert missing == {"success": False, "error": "Customer not found"}

    @pytest.mark.asyncio
    async def test_availability_completion_and_customer_updates(self, backend, cart):
        """Book a day, then go through the admin calls the dashboard makes."""
        cart.add_item(
            {
                "packageId": "7",
                "packageName": "Full Detail",
                "basePrice": 299,
                "vehicleType": "sedan",
                "finalPrice": 299,
                "quantity": 1,
            }
        )
        assert (await CheckoutAggregator(cart, backend).submit(checkout_form())).ok

        availability = await backend.check_availability("2026-10-20")
        assert availability["success"] is True
        assert (availability["totalCustomers"], availability["totalPackages"]) == (1, 1)
        assert availability["available"] is True

        booking_id = (await backend.list_bookings())["bookings"][0]["id"]
        completed = await backend.complete_booking(booking_id)
        assert completed["booking"]["paymentStatus"] == "completed"
        assert (await backend.complete_booking("missing"))["error"] == "Booking not found"

        customers = (await backend.list_customers())["customers"]
        assert [c["email"] for c in customers] == ["jane@example.com"]
        assert customers[0]["totalSpent"] == 329

        updated = await backend.update_customer(
            customers[0]["id"],
            {
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane@example.com",
                "phone": "514-555-0199",
                "streetAddress": "9 New Street",
                "city": "Laval",
                "postalCode": "h7a 1a1",
            },
        )
        assert updated["success"] is True
        assert updated["customer"]["city"] == "Laval"
        assert updated["customer"]["postalCode"] == "H7A 1A1"
