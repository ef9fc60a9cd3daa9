"""Booking lifecycle: creation, status changes and the cancellation window."""
from datetime import timedelta

import pytest

from conftest import T0, booking_payload
from repository.bookings import BookingRepo
from services.booking_service import BookingService, can_cancel, cancel_minutes_left
from services.exceptions import (
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    WindowExpiredError,
)
from tables.admin_notifications import AdminNotification
from utils.notifications import NotificationService


class TestCreateBooking:
    async def test_snapshots_catalog_price_and_starts_pending(self, make_booking):
        booking = await make_booking()

        assert booking.total_price == 50000
        assert booking.service_name == "Mandi Biasa"
        assert booking.status == "pending"
        assert booking.created_at == T0
        assert booking.updated_at == T0
        assert booking.cancelled_at is None
        assert booking.cancel_reason is None

    async def test_notes_default_to_empty(self, make_booking):
        booking = await make_booking(notes=None)
        assert booking.notes == ""

    @pytest.mark.parametrize("field", ["name", "phone", "address", "service", "date", "time"])
    async def test_required_fields(self, db, field):
        with pytest.raises(ValidationError, match=f"Field {field} is required") as exc_info:
            await BookingService.create_booking(db, booking_payload(**{field: "  "}))
        assert exc_info.value.field == field
        assert BookingRepo.count(db) == 0

    async def test_unknown_service_rejected(self, db):
        with pytest.raises(ValidationError, match="Invalid service"):
            await BookingService.create_booking(db, booking_payload(service="mandi-emas"))

    async def test_notification_failure_does_not_fail_booking(self, db, monkeypatch):
        async def broken(data, kind):
            raise RuntimeError("gateway down")

        monkeypatch.setattr(NotificationService, "send_notification", staticmethod(broken))

        booking = await BookingService.create_booking(db, booking_payload())
        assert BookingRepo.find_by_id(db, booking.id) is not None

    async def test_sends_new_booking_notification(self, db, monkeypatch):
        sent = []

        async def record(data, kind):
            sent.append((data.booking_id, kind))
            return {"success": True}

        monkeypatch.setattr(NotificationService, "send_notification", staticmethod(record))

        booking = await BookingService.create_booking(db, booking_payload())
        assert sent == [(booking.id, "new_booking")]

    async def test_creates_admin_notification(self, db, make_booking):
        booking = await make_booking()

        notification = db.query(AdminNotification).one()
        assert notification.type == "new_booking"
        assert notification.booking_id == booking.id
        assert notification.customer_name == "Rina Wijaya"


class TestCancelBooking:
    async def test_cancel_window_scenario(self, db, make_booking):
        booking = await make_booking(now=T0)

        with pytest.raises(WindowExpiredError) as exc_info:
            await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=31))
        assert exc_info.value.minutes_elapsed == 31
        assert BookingService.get_booking(db, booking.id).status == "pending"

        cancelled = await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=10))
        assert cancelled.status == "cancelled"
        assert cancelled.cancelled_at == T0 + timedelta(minutes=10)
        assert cancelled.cancel_reason == "Cancelled by customer"

    async def test_minutes_are_floored(self, db, make_booking):
        booking = await make_booking()
        cancelled = await BookingService.cancel_booking(
            db, booking.id, now=T0 + timedelta(minutes=30, seconds=59)
        )
        assert cancelled.status == "cancelled"

    async def test_keeps_given_reason(self, db, make_booking):
        booking = await make_booking()
        cancelled = await BookingService.cancel_booking(
            db, booking.id, reason="Cat is sick", now=T0 + timedelta(minutes=5)
        )
        assert cancelled.cancel_reason == "Cat is sick"

    async def test_confirmed_booking_can_be_cancelled(self, db, make_booking):
        booking = await make_booking()
        await BookingService.update_status(db, booking.id, "confirmed", now=T0 + timedelta(minutes=1))

        cancelled = await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=2))
        assert cancelled.status == "cancelled"

    @pytest.mark.parametrize("path", [["confirmed", "in-progress"], ["confirmed", "in-progress", "completed"]])
    async def test_only_pending_or_confirmed(self, db, make_booking, path):
        booking = await make_booking()
        for status in path:
            await BookingService.update_status(db, booking.id, status, now=T0)

        with pytest.raises(InvalidStateError, match=f"Status: {path[-1]}"):
            await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=1))
        assert BookingService.get_booking(db, booking.id).status == path[-1]

    async def test_cancelled_booking_cannot_be_cancelled_again(self, db, make_booking):
        booking = await make_booking()
        await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=1))

        with pytest.raises(InvalidStateError):
            await BookingService.cancel_booking(db, booking.id, now=T0 + timedelta(minutes=2))

    async def test_unknown_booking(self, db):
        with pytest.raises(NotFoundError):
            await BookingService.cancel_booking(db, "missing-id")

    async def test_records_cancellation_for_admin(self, db, make_booking):
        booking = await make_booking()
        await BookingService.cancel_booking(db, booking.id, reason="Moving house", now=T0 + timedelta(minutes=3))

        notification = db.query(AdminNotification).filter(AdminNotification.type == "booking_cancelled").one()
        assert notification.booking_id == booking.id
        assert notification.data["refund_amount"] == 50000
        assert notification.data["reason"] == "Moving house"

    async def test_can_cancel_helpers(self, make_booking):
        booking = await make_booking()

        assert can_cancel(booking, T0 + timedelta(minutes=30))
        assert not can_cancel(booking, T0 + timedelta(minutes=31))
        assert cancel_minutes_left(booking, T0 + timedelta(minutes=12)) == 18
        assert cancel_minutes_left(booking, T0 + timedelta(hours=2)) == 0


class TestUpdateStatus:
    async def test_full_lifecycle_keeps_price(self, db, make_booking):
        booking = await make_booking(service="mandi-grooming")

        for status in ("confirmed", "in-progress", "completed"):
            booking = await BookingService.update_status(db, booking.id, status, now=T0 + timedelta(hours=1))
            assert booking.status == status
            assert booking.total_price == 99000
        assert booking.updated_at == T0 + timedelta(hours=1)

    @pytest.mark.parametrize("current_path,target", [
        ([], "completed"),
        ([], "in-progress"),
        (["confirmed"], "pending"),
        (["confirmed", "in-progress"], "cancelled"),
        (["confirmed", "in-progress", "completed"], "pending"),
        (["cancelled"], "confirmed"),
    ])
    async def test_rejects_transitions_outside_the_graph(self, db, make_booking, current_path, target):
        booking = await make_booking()
        for status in current_path:
            await BookingService.update_status(db, booking.id, status)

        with pytest.raises(InvalidTransitionError):
            await BookingService.update_status(db, booking.id, target)

    async def test_unknown_status_value(self, db, make_booking):
        booking = await make_booking()
        with pytest.raises(ValidationError, match="Status must be one of"):
            await BookingService.update_status(db, booking.id, "no_show")

    async def test_unknown_booking(self, db):
        with pytest.raises(NotFoundError):
            await BookingService.update_status(db, "missing-id", "confirmed")

    async def test_admin_cancellation_sets_cancel_fields(self, db, make_booking):
        booking = await make_booking()
        now = T0 + timedelta(days=1)

        cancelled = await BookingService.update_status(db, booking.id, "cancelled", now=now)
        assert cancelled.cancelled_at == now
        assert cancelled.cancel_reason == "Cancelled by admin"

    async def test_notifies_on_confirm_and_complete_only(self, db, make_booking, monkeypatch):
        booking = await make_booking()
        sent = []

        async def record(data, kind):
            sent.append(kind)
            return {"success": True}

        monkeypatch.setattr(NotificationService, "send_notification", staticmethod(record))

        for status in ("confirmed", "in-progress", "completed"):
            await BookingService.update_status(db, booking.id, status)
        assert sent == ["confirmed", "completed"]


class TestQueries:
    async def test_search_matches_phone_name_and_id(self, db, make_booking):
        first = await make_booking(name="Andi", phone="0811111111")
        await make_booking(name="Bella", phone="0822222222")

        assert [b.id for b in BookingService.search_bookings(db, "081111")] == [first.id]
        assert [b.id for b in BookingService.search_bookings(db, "Andi")] == [first.id]
        assert [b.id for b in BookingService.search_bookings(db, first.id[:8])] == [first.id]
        assert len(BookingService.search_bookings(db, "08")) == 2

    async def test_search_is_case_sensitive(self, db, make_booking):
        booking = await make_booking(name="Rina")

        assert [b.id for b in BookingService.search_bookings(db, "Rina")] == [booking.id]
        assert BookingService.search_bookings(db, "rina") == []

    async def test_search_requires_query(self, db):
        with pytest.raises(ValidationError):
            BookingService.search_bookings(db, "  ")

    async def test_list_filters_by_status_newest_first(self, db, make_booking):
        older = await make_booking(now=T0)
        newer = await make_booking(now=T0 + timedelta(minutes=5))
        await BookingService.update_status(db, older.id, "confirmed")

        assert [b.id for b in BookingService.list_bookings(db)] == [newer.id, older.id]
        assert [b.id for b in BookingService.list_bookings(db, status="confirmed")] == [older.id]
        assert [b.id for b in BookingService.list_bookings(db, status="pending", search="Rina")] == [newer.id]

    async def test_blank_search_lists_everything(self, db, make_booking):
        booking = await make_booking()

        assert [b.id for b in BookingService.list_bookings(db, search="   ")] == [booking.id]
        assert [b.id for b in BookingService.list_bookings(db, status="pending", search=" ")] == [booking.id]

    async def test_repository_never_rewrites_price(self, db, make_booking):
        booking = await make_booking()
        updated = BookingRepo.update(db, booking.id, {"total_price": 1, "notes": "Updated"})

        assert updated.total_price == 50000
        assert updated.notes == "Updated"

    async def test_update_missing_returns_none(self, db):
        assert BookingRepo.update(db, "missing-id", {"status": "confirmed"}) is None


class TestReminderAndDelete:
    async def test_reminder_for_confirmed_booking(self, db, make_booking):
        booking = await make_booking()
        await BookingService.update_status(db, booking.id, "confirmed")

        result = await BookingService.send_reminder(db, booking.id)
        assert result["success"] is True
        assert result["kind"] == "reminder"

    async def test_no_reminder_for_completed_booking(self, db, make_booking):
        booking = await make_booking()
        for status in ("confirmed", "in-progress", "completed"):
            await BookingService.update_status(db, booking.id, status)

        with pytest.raises(InvalidStateError):
            await BookingService.send_reminder(db, booking.id)

    async def test_delete(self, db, make_booking):
        booking = await make_booking()
        BookingService.delete_booking(db, booking.id)

        with pytest.raises(NotFoundError):
            BookingService.get_booking(db, booking.id)
        with pytest.raises(NotFoundError):
            BookingService.delete_booking(db, booking.id)
