"""
Daily capacity - groups bookings per calendar day and counts customers/packages.

The limits are shown next to the counts; exceeding them is reported through
is_full but never blocked here. Works on ORM Booking rows and on the booking
dicts returned by GET /api/admin/bookings.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ...catalog import MAX_CUSTOMERS_PER_DAY, MAX_PACKAGES_PER_DAY


@dataclass
class DailyCapacity:
    day: date
    bookings: list[Any] = field(default_factory=list)
    total_customers: int = 0
    total_packages: int = 0
    max_customers: int = MAX_CUSTOMERS_PER_DAY
    max_packages: int = MAX_PACKAGES_PER_DAY

    @property
    def is_full(self) -> bool:
        return self.total_customers >= self.max_customers or self.total_packages >= self.max_packages


def booking_day(booking: Any) -> date:
    """Calendar date of a booking, ignoring the time of day"""
    if isinstance(booking, dict):
        value = booking["bookingDate"]
    else:
        value = booking.booking_date

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def package_quantity(booking: Any) -> int:
    """Sum of package quantities on one booking"""
    if isinstance(booking, dict):
        return sum(int(pkg.get("quantity", 0)) for pkg in booking.get("packages") or [])
    return sum(pkg.quantity for pkg in booking.packages)


def summarize_day(bookings: Iterable[Any]) -> tuple[int, int]:
    """(customer count, package count) for bookings already known to share a day"""
    bookings = list(bookings)
    return len(bookings), sum(package_quantity(b) for b in bookings)


def group_bookings_by_date(bookings: Iterable[Any]) -> list[DailyCapacity]:
    """Group bookings by day, earliest day first; bookings keep their input order"""
    days: dict[date, DailyCapacity] = {}
    for booking in bookings:
        day = booking_day(booking)
        entry = days.setdefault(day, DailyCapacity(day=day))
        entry.bookings.append(booking)
        entry.total_customers += 1
        entry.total_packages += package_quantity(booking)

    return [days[day] for day in sorted(days)]


def would_exceed_capacity(existing: Iterable[Any], new_package_count: int) -> Optional[str]:
    """
    Check a new booking against the day's limits.

    Returns the rejection message, or None when the booking fits.
    """
    total_customers, total_packages = summarize_day(existing)
    if total_customers >= MAX_CUSTOMERS_PER_DAY:
        return f"Maximum {MAX_CUSTOMERS_PER_DAY} customers per day reached. Please choose another date."
    if total_packages + new_package_count > MAX_PACKAGES_PER_DAY:
        return f"Maximum {MAX_PACKAGES_PER_DAY} packages per day reached. Please choose another date."
    return None
