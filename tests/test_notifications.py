"""Customer notification channels and persisted admin notifications."""
from datetime import timedelta

import pytest

from models.notifications import NotificationData
from services.catalog import format_rupiah, list_services
from utils.clock import utcnow
from utils.firebase_service import FirebaseService
from utils.notification_service import AdminNotificationService
from utils.notifications import NotificationService, build_whatsapp_message


@pytest.fixture
def data():
    return NotificationData(
        phone="081234567890",
        name="Rina",
        booking_id="b7f2c1d0-aaaa-bbbb-cccc-123456abcdef",
        service_name="Mandi Biasa",
        date="2024-03-02",
        time="10:00",
        address="Jl. Kemang Raya No. 10",
        total_price=50000,
        status="pending",
    )


class TestCustomerNotifications:
    async def test_sends_both_channels(self, data):
        result = await NotificationService.send_notification(data, "new_booking")

        assert result["success"] is True
        assert result["whatsapp"]["recipient"] == "081234567890"
        assert result["email"]["recipient"] == "081234567890@example.com"

    async def test_one_failing_channel_is_reported_not_raised(self, data, monkeypatch):
        async def broken(data, kind):
            raise ConnectionError("smtp unreachable")

        monkeypatch.setattr(NotificationService, "send_email_notification", staticmethod(broken))

        result = await NotificationService.send_notification(data, "confirmed")
        assert result["success"] is False
        assert result["email"] == {"success": False, "error": "smtp unreachable"}
        assert result["whatsapp"]["success"] is True

    async def test_unknown_kind(self, data):
        with pytest.raises(ValueError):
            await NotificationService.send_notification(data, "birthday")

    def test_new_booking_message(self, data):
        message = build_whatsapp_message(data, "new_booking")

        assert "#abcdef" in message
        assert "Rp 50.000" in message
        assert "Jl. Kemang Raya No. 10" in message

    def test_reminder_message(self, data):
        message = build_whatsapp_message(data, "reminder")
        assert "Reminder" in message
        assert "10:00" in message


class TestAdminNotifications:
    async def test_create_without_firebase(self, db):
        notification = await AdminNotificationService.create_and_send_notification(
            db, "new_rating", "booking-1", "Rina", "Mandi Biasa", {"rating": 5}
        )

        assert notification.id is not None
        assert notification.message == "⭐ New rating from Rina for booking booking-1"
        assert notification.is_read is False
        assert notification.push_success is False
        assert FirebaseService.is_initialized() is False

    async def test_generic_message(self, db):
        notification = await AdminNotificationService.create_and_send_notification(db, "daily_report")
        assert notification.message == "Notification: daily_report"

    async def test_records_successful_push(self, db, monkeypatch):
        async def fake_push(topic, title, body, data=None):
            return {"success": True, "response": "projects/demo/messages/1"}

        monkeypatch.setattr(FirebaseService, "send_to_topic", staticmethod(fake_push))

        notification = await AdminNotificationService.create_and_send_notification(db, "new_booking", "b1", "Rina")
        assert notification.push_success is True

    async def test_read_tracking_and_stats(self, db):
        first = await AdminNotificationService.create_and_send_notification(db, "new_booking", "b1", "A")
        await AdminNotificationService.create_and_send_notification(db, "new_booking", "b2", "B")
        await AdminNotificationService.create_and_send_notification(db, "new_rating", "b3", "C")

        assert AdminNotificationService.mark_notification_read(db, first.id) is True
        assert AdminNotificationService.mark_notification_read(db, 9999) is False

        unread = AdminNotificationService.get_notifications(db, unread_only=True)
        assert [n.booking_id for n in unread] == ["b3", "b2"]

        stats = AdminNotificationService.get_notification_stats(db)
        assert stats == {"total_notifications": 3, "unread_count": 2, "recent_count": 3}

        assert AdminNotificationService.mark_all_notifications_read(db) == 2
        assert AdminNotificationService.get_notifications(db, unread_only=True) == []

    async def test_recent_count_excludes_old(self, db):
        old = await AdminNotificationService.create_and_send_notification(db, "new_booking", "b1", "A")
        old.created_at = utcnow() - timedelta(days=2)
        db.commit()

        stats = AdminNotificationService.get_notification_stats(db)
        assert stats["recent_count"] == 0
        assert stats["total_notifications"] == 1


def test_catalog_listing():
    assert list_services() == [
        {"code": "mandi-biasa", "name": "Mandi Biasa", "price": 50000},
        {"code": "mandi-kutu", "name": "Mandi Anti Kutu", "price": 75000},
        {"code": "mandi-grooming", "name": "Mandi + Grooming Lengkap", "price": 99000},
    ]


@pytest.mark.parametrize("amount,expected", [(50000, "Rp 50.000"), (99000, "Rp 99.000"), (1250000, "Rp 1.250.000")])
def test_format_rupiah(amount, expected):
    assert format_rupiah(amount) == expected
