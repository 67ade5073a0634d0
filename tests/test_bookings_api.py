"""Tests for the booking endpoints."""

import copy

from cleanic.models import Booking, Customer


def post_booking(api_client, payload):
    return api_client.post("/api/bookings", json=payload)


class TestCreateBooking:
    def test_create_booking_persists_totals(self, api_client, booking_payload, db_session):
        response = post_booking(api_client, booking_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Booking created successfully!"

        booking = data["booking"]
        assert booking["serviceTotal"] == 189
        assert booking["reservationFee"] == 30
        assert booking["totalAmount"] == 219
        assert booking["paymentStatus"] == "reservation_paid"
        assert booking["paymentMethod"] == "e_transfer"
        assert booking["bookingTime"] == "7:30 AM"
        assert booking["customer"]["postalCode"] == "H1A 1A1"
        assert [p["packageName"] for p in booking["packages"]] == ["Interior Premium"]

        assert db_session.query(Booking).count() == 1

    def test_existing_customer_is_reused_by_email(self, api_client, booking_payload, db_session):
        post_booking(api_client, booking_payload)
        second = copy.deepcopy(booking_payload)
        second["customer"]["email"] = "JANE@example.com"
        second["bookingDate"] = "2026-10-21T09:00:00"
        post_booking(api_client, second)

        assert db_session.query(Customer).count() == 1
        assert db_session.query(Booking).count() == 2

    def test_service_total_is_stored_as_submitted(self, api_client, booking_payload, caplog):
        """The server does not recompute serviceTotal; a mismatch is only logged."""
        booking_payload["serviceTotal"] = 150

        response = post_booking(api_client, booking_payload)

        assert response.json()["booking"]["serviceTotal"] == 150
        assert response.json()["booking"]["totalAmount"] == 180
        assert "does not match package lines" in caplog.text

    def test_package_lines_keep_submission_order(self, api_client, booking_payload):
        booking_payload["packages"].append(
            {
                "packageId": "7",
                "packageName": "Full Detail",
                "vehicleType": "van",
                "basePrice": 299,
                "finalPrice": 349,
                "quantity": 1,
            }
        )
        booking_payload["serviceTotal"] = 189 + 349

        packages = post_booking(api_client, booking_payload).json()["booking"]["packages"]

        assert [p["packageId"] for p in packages] == ["2", "7"]

    def test_unknown_payment_method_is_rejected(self, api_client, booking_payload):
        booking_payload["paymentMethod"] = "cash"

        response = post_booking(api_client, booking_payload)

        assert response.status_code == 422
        assert response.json()["success"] is False
        assert "paymentMethod" in response.json()["error"]

    def test_blank_customer_field_is_rejected(self, api_client, booking_payload):
        booking_payload["customer"]["city"] = " "

        response = post_booking(api_client, booking_payload)

        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_capacity_not_enforced_by_default(self, api_client, booking_payload):
        for hour in (8, 10, 12):
            payload = copy.deepcopy(booking_payload)
            payload["bookingDate"] = f"2026-10-20T{hour:02d}:00:00"
            payload["customer"]["email"] = f"customer{hour}@example.com"
            assert post_booking(api_client, payload).json()["success"] is True


class TestCapacityEnforcement:
    def test_third_package_on_a_day_is_rejected(self, api_client, enforce_capacity, booking_payload):
        assert post_booking(api_client, booking_payload).json()["success"] is True

        second = copy.deepcopy(booking_payload)
        second["packages"][0]["quantity"] = 2
        second["serviceTotal"] = 378
        second["bookingDate"] = "2026-10-20T16:00:00"

        response = post_booking(api_client, second)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Maximum 2 packages per day reached. Please choose another date.",
        }

    def test_third_customer_on_a_day_is_rejected(self, api_client, enforce_capacity, booking_payload):
        for email in ("a@example.com", "b@example.com"):
            payload = copy.deepcopy(booking_payload)
            payload["customer"]["email"] = email
            payload["packages"][0]["quantity"] = 1
            response = post_booking(api_client, payload)
            # Second booking already brings the day to two packages
            assert response.status_code == 200

        third = copy.deepcopy(booking_payload)
        third["customer"]["email"] = "c@example.com"
        response = post_booking(api_client, third)

        assert response.status_code == 400
        assert "customers per day" in response.json()["error"]


class TestAvailability:
    def test_open_day(self, api_client):
        response = api_client.get("/api/bookings/availability/2026-10-20")

        assert response.json() == {
            "success": True,
            "available": True,
            "totalCustomers": 0,
            "totalPackages": 0,
            "maxCustomers": 2,
            "maxPackages": 2,
        }

    def test_counts_only_that_day(self, api_client, booking_payload):
        post_booking(api_client, booking_payload)
        other_day = copy.deepcopy(booking_payload)
        other_day["bookingDate"] = "2026-10-21T09:00:00"
        post_booking(api_client, other_day)

        data = api_client.get("/api/bookings/availability/2026-10-20T23:00:00").json()

        assert data["totalCustomers"] == 1
        assert data["totalPackages"] == 1
        assert data["available"] is True

    def test_invalid_date(self, api_client):
        response = api_client.get("/api/bookings/availability/not-a-date")

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestAdminBookings:
    def test_list_is_ordered_by_date(self, api_client, booking_payload):
        later = copy.deepcopy(booking_payload)
        later["bookingDate"] = "2026-11-02T09:00:00"
        post_booking(api_client, later)
        post_booking(api_client, booking_payload)

        bookings = api_client.get("/api/admin/bookings").json()["bookings"]

        assert [b["bookingDate"][:10] for b in bookings] == ["2026-10-20", "2026-11-02"]
        assert bookings[0]["customer"]["email"] == "jane@example.com"

    def test_bookings_for_date(self, api_client, booking_payload):
        post_booking(api_client, booking_payload)

        on_day = api_client.get("/api/admin/bookings/date/2026-10-20").json()["bookings"]
        other_day = api_client.get("/api/admin/bookings/date/2026-10-21").json()["bookings"]

        assert len(on_day) == 1
        assert other_day == []

    def test_mark_complete(self, api_client, booking_payload):
        booking_id = post_booking(api_client, booking_payload).json()["booking"]["id"]

        response = api_client.put(f"/api/admin/bookings/{booking_id}/complete")

        assert response.json()["success"] is True
        assert response.json()["booking"]["paymentStatus"] == "completed"
        assert response.json()["message"] == "Booking marked as completed"

    def test_mark_complete_unknown_booking(self, api_client):
        response = api_client.put("/api/admin/bookings/nope/complete")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Booking not found"}

    def test_schedule_groups_by_day(self, api_client, booking_payload):
        post_booking(api_client, booking_payload)
        same_day = copy.deepcopy(booking_payload)
        same_day["bookingDate"] = "2026-10-20T15:00:00"
        same_day["packages"][0]["quantity"] = 2
        same_day["serviceTotal"] = 378
        post_booking(api_client, same_day)

        days = api_client.get("/api/admin/schedule").json()["days"]

        assert len(days) == 1
        assert days[0]["date"] == "2026-10-20"
        assert days[0]["totalCustomers"] == 2
        assert days[0]["totalPackages"] == 3
        assert days[0]["isFull"] is True
