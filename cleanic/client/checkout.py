"""
Checkout - turns the cart plus the checkout form into a booking submission.

Validation runs in a fixed order and stops at the first problem:
contact -> address -> payment method -> card fields (credit card only).
Fields are checked for presence only; card numbers and expiry dates are not
otherwise verified.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..catalog import PAYMENT_CREDIT_CARD, PAYMENT_E_TRANSFER, RESERVATION_FEE
from ..config import ETRANSFER_EMAIL
from ..shared.validators import normalize_postal_code
from .api import BackendConnectionError, BookingApiClient
from .cart_store import CartStore

logger = logging.getLogger(__name__)

CONTACT_MESSAGE = "Please fill in all contact fields."
ADDRESS_MESSAGE = "Please fill in all address fields."
PAYMENT_METHOD_MESSAGE = "Please select a payment method."
CARD_MESSAGE = "Please fill in all payment fields."
EMPTY_CART_MESSAGE = "Please add items to your cart first."
GENERIC_FAILURE_MESSAGE = "Failed to create booking"
CONNECTION_MESSAGE = "Could not connect to server"


class CheckoutValidationError(ValueError):
    """A required checkout field or selection is missing"""

    def __init__(self, group: str, message: str):
        super().__init__(message)
        self.group = group
        self.message = message


@dataclass
class CheckoutForm:
    full_name: str = ""
    email: str = ""
    phone: str = ""
    street_address: str = ""
    city: str = ""
    postal_code: str = ""
    booking_date: datetime = field(default_factory=datetime.now)
    booking_time: str = ""
    payment_method: Optional[str] = None
    card_holder_name: str = ""
    card_number: str = ""
    card_expiry: str = ""
    card_cvv: str = ""
    message: Optional[str] = None


@dataclass(frozen=True)
class CheckoutTotals:
    service_total: int
    due_today: int
    due_later: int


@dataclass
class CheckoutResult:
    status: str  # confirmed, invalid, rejected, connection_error, busy, abandoned
    title: str
    message: str
    totals: Optional[CheckoutTotals] = None
    booking: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "confirmed"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_checkout(form: CheckoutForm) -> None:
    """
    Check the form in checkout order.

    Raises:
        CheckoutValidationError: For the first missing group
    """
    if any(_blank(v) for v in (form.full_name, form.email, form.phone)):
        raise CheckoutValidationError("contact", CONTACT_MESSAGE)

    if any(_blank(v) for v in (form.street_address, form.city, form.postal_code)):
        raise CheckoutValidationError("address", ADDRESS_MESSAGE)

    if form.payment_method not in (PAYMENT_CREDIT_CARD, PAYMENT_E_TRANSFER):
        raise CheckoutValidationError("payment_method", PAYMENT_METHOD_MESSAGE)

    if form.payment_method == PAYMENT_CREDIT_CARD and any(
        _blank(v)
        for v in (form.card_holder_name, form.card_number, form.card_expiry, form.card_cvv)
    ):
        raise CheckoutValidationError("card", CARD_MESSAGE)


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split on the first space: ("Jane Ann Doe") -> ("Jane", "Ann Doe")"""
    parts = full_name.strip().split(" ")
    return parts[0], " ".join(parts[1:])


def compute_totals(service_total: int) -> CheckoutTotals:
    """The reservation fee is due today; the balance may go negative for small orders"""
    return CheckoutTotals(
        service_total=service_total,
        due_today=RESERVATION_FEE,
        due_later=service_total - RESERVATION_FEE,
    )


def build_submission(cart: CartStore, form: CheckoutForm) -> dict[str, Any]:
    """Request body for POST /api/bookings"""
    full_name = form.full_name.strip()
    first_name, last_name = split_full_name(full_name)
    message = form.message.strip() if form.message else None

    return {
        "customer": {
            "firstName": first_name,
            "lastName": last_name,
            "fullName": full_name,
            "email": form.email.strip(),
            "phone": form.phone.strip(),
            "streetAddress": form.street_address.strip(),
            "city": form.city.strip(),
            "postalCode": normalize_postal_code(form.postal_code),
        },
        "bookingDate": form.booking_date.isoformat(),
        "bookingTime": form.booking_time,
        "paymentMethod": form.payment_method,
        "serviceTotal": cart.get_total_price(),
        "packages": [
            {
                "packageId": item.packageId,
                "packageName": item.packageName,
                "vehicleType": item.vehicleType,
                "basePrice": item.basePrice,
                "finalPrice": item.finalPrice,
                "quantity": item.quantity,
            }
            for item in cart.items
        ],
        "message": message or None,
    }


def format_booking_date(value: datetime) -> str:
    """e.g. "Tue, Oct 20, 2026" """
    return f"{value:%a}, {value:%b} {value.day}, {value.year}"


def confirmation_message(form: CheckoutForm, totals: CheckoutTotals) -> str:
    scheduled = f"Your detailing service is scheduled for {format_booking_date(form.booking_date)}"
    if form.booking_time:
        scheduled += f" at {form.booking_time}"
    scheduled += "."

    if form.payment_method == PAYMENT_CREDIT_CARD:
        payment = (
            f"Your ${totals.due_today} reservation fee has been charged to your credit card."
        )
    else:
        payment = (
            f"Please send the ${totals.due_today} reservation fee by Interac e-Transfer "
            f"to {ETRANSFER_EMAIL} to secure your appointment."
        )

    balance = f"The remaining balance of ${totals.due_later} is due after your service."
    return f"{scheduled} {payment} {balance}"


class CheckoutAggregator:
    """
    Submits the cart as a booking.

    Only one submission may be in flight. abandon() marks the current screen as
    gone: a response that arrives afterwards is ignored and does not clear the cart.
    """

    def __init__(self, cart: CartStore, api: BookingApiClient):
        self.cart = cart
        self.api = api
        self.busy = False
        self._generation = 0

    def totals(self) -> CheckoutTotals:
        return compute_totals(self.cart.get_total_price())

    def abandon(self) -> None:
        self._generation += 1

    async def submit(self, form: CheckoutForm) -> CheckoutResult:
        if self.busy:
            return CheckoutResult("busy", "Please Wait", "Your booking is being submitted.")

        if len(self.cart) == 0:
            return CheckoutResult("invalid", "Empty Cart", EMPTY_CART_MESSAGE)

        try:
            validate_checkout(form)
        except CheckoutValidationError as e:
            return CheckoutResult("invalid", "Missing Information", e.message)

        totals = self.totals()
        submission = build_submission(self.cart, form)
        generation = self._generation

        self.busy = True
        try:
            data = await self.api.create_booking(submission)
        except BackendConnectionError as e:
            if generation != self._generation:
                return self._abandoned()
            logger.error(f"Create booking error: {e}")
            return CheckoutResult("connection_error", "Connection Error", CONNECTION_MESSAGE, totals)
        finally:
            self.busy = False

        if generation != self._generation:
            return self._abandoned()

        if data.get("success"):
            self.cart.clear_cart()
            logger.info(f"✅ Booking submitted for {submission['customer']['email']}")
            return CheckoutResult(
                "confirmed",
                "Booking Confirmed!",
                confirmation_message(form, totals),
                totals,
                data.get("booking"),
            )

        return CheckoutResult(
            "rejected", "Error", data.get("error") or GENERIC_FAILURE_MESSAGE, totals
        )

    def _abandoned(self) -> CheckoutResult:
        logger.info("Ignoring booking response for an abandoned checkout")
        return CheckoutResult("abandoned", "", "")
