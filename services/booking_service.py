# services/booking_service.py - Booking lifecycle: creation, status changes, cancellation
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from config import CANCELLATION_WINDOW_MINUTES
from models.notifications import NotificationData, NotificationKind
from repository.bookings import BookingRepo
from services.catalog import get_service, format_rupiah
from services.exceptions import (
    ValidationError, NotFoundError, InvalidStateError, InvalidTransitionError, WindowExpiredError
)
from tables.bookings import Booking
from utils.clock import utcnow
from utils.notifications import NotificationService
from utils.notification_service import AdminNotificationService

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ("pending", "confirmed", "in-progress", "completed", "cancelled")

BOOKING_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"in-progress", "cancelled"},
    "in-progress": {"completed"},
    "completed": set(),
    "cancelled": set(),
}

CANCELLABLE_STATUSES = ("pending", "confirmed")
REQUIRED_FIELDS = ("name", "phone", "address", "service", "date", "time")

DEFAULT_CUSTOMER_CANCEL_REASON = "Cancelled by customer"
DEFAULT_ADMIN_CANCEL_REASON = "Cancelled by admin"

# Status changes that send the customer a message
STATUS_NOTIFICATIONS = {
    "confirmed": NotificationKind.CONFIRMED,
    "completed": NotificationKind.COMPLETED,
}


def minutes_since_created(booking: Booking, now: datetime) -> int:
    """Whole minutes elapsed since the booking was placed"""
    return int((now - booking.created_at).total_seconds() // 60)


def can_cancel(booking: Booking, now: Optional[datetime] = None) -> bool:
    now = now or utcnow()
    return (
        booking.status in CANCELLABLE_STATUSES
        and minutes_since_created(booking, now) <= CANCELLATION_WINDOW_MINUTES
    )


def cancel_minutes_left(booking: Booking, now: Optional[datetime] = None) -> int:
    if not can_cancel(booking, now):
        return 0
    return CANCELLATION_WINDOW_MINUTES - minutes_since_created(booking, now or utcnow())


class BookingService:

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Booking:
        booking = BookingRepo.find_by_id(db, booking_id)
        if not booking:
            raise NotFoundError("Booking", booking_id)
        return booking

    @staticmethod
    def list_bookings(db: Session, status: Optional[str] = None, search: Optional[str] = None) -> List[Booking]:
        """All bookings newest first, optionally narrowed by status and search text"""
        if status and status not in BOOKING_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}", field="status")

        search = (search or "").strip()
        if search:
            return BookingRepo.search(db, search, status)
        if status:
            return BookingRepo.find_by_status(db, status)
        return BookingRepo.get_all(db)

    @staticmethod
    def search_bookings(db: Session, query: str) -> List[Booking]:
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="query")
        return BookingRepo.search(db, query.strip())

    @staticmethod
    async def create_booking(db: Session, data: Dict[str, Any], now: Optional[datetime] = None) -> Booking:
        """Validate, snapshot the catalog price and persist a pending booking"""
        cleaned = {}
        for field in REQUIRED_FIELDS:
            value = data.get(field)
            if value is None or not str(value).strip():
                raise ValidationError(f"Field {field} is required", field=field)
            cleaned[field] = str(value).strip()

        service = get_service(cleaned["service"])
        if not service:
            raise ValidationError("Invalid service selected", field="service")

        now = now or utcnow()
        booking = Booking(
            name=cleaned["name"],
            phone=cleaned["phone"],
            address=cleaned["address"],
            service=cleaned["service"],
            service_name=service["name"],
            total_price=service["price"],
            date=cleaned["date"],
            time=cleaned["time"],
            notes=(data.get("notes") or "").strip(),
            status="pending",
            created_at=now,
            updated_at=now
        )
        booking = BookingRepo.create(db, booking)
        logger.info(f"Booking {booking.id} created for {booking.name} ({booking.service})")

        await BookingService._notify_customer(booking, NotificationKind.NEW_BOOKING)
        await BookingService._notify_admin(
            db, "new_booking", booking,
            {"phone": booking.phone, "date": booking.date, "time": booking.time}
        )
        return booking

    @staticmethod
    async def update_status(
        db: Session,
        booking_id: str,
        new_status: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> Booking:
        """Admin status change along the booking state machine"""
        if new_status not in BOOKING_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}", field="status")

        booking = BookingService.get_booking(db, booking_id)
        old_status = booking.status
        if new_status not in BOOKING_TRANSITIONS.get(old_status, set()):
            raise InvalidTransitionError(old_status, new_status)

        now = now or utcnow()
        updates = {"status": new_status, "updated_at": now}
        if new_status == "cancelled":
            updates["cancelled_at"] = now
            updates["cancel_reason"] = reason or DEFAULT_ADMIN_CANCEL_REASON

        updated = BookingRepo.update(db, booking_id, updates)
        if not updated:
            raise NotFoundError("Booking", booking_id)

        logger.info(f"Booking {booking_id} status updated from {old_status} to {new_status}")

        kind = STATUS_NOTIFICATIONS.get(new_status)
        if kind:
            await BookingService._notify_customer(updated, kind)
        return updated

    @staticmethod
    async def cancel_booking(
        db: Session,
        booking_id: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> Booking:
        """Customer self-service cancellation inside the window after ordering"""
        booking = BookingService.get_booking(db, booking_id)

        if booking.status not in CANCELLABLE_STATUSES:
            raise InvalidStateError(
                f"Booking cannot be cancelled. Status: {booking.status}",
                current_status=booking.status
            )

        now = now or utcnow()
        elapsed = minutes_since_created(booking, now)
        if elapsed > CANCELLATION_WINDOW_MINUTES:
            raise WindowExpiredError(elapsed, CANCELLATION_WINDOW_MINUTES)

        cancel_reason = reason.strip() if reason and reason.strip() else DEFAULT_CUSTOMER_CANCEL_REASON
        updated = BookingRepo.update(db, booking_id, {
            "status": "cancelled",
            "cancelled_at": now,
            "cancel_reason": cancel_reason,
            "updated_at": now
        })
        if not updated:
            raise NotFoundError("Booking", booking_id)

        logger.info(
            "🔔 BOOKING CANCELLATION | booking=#%s customer=%s phone=%s cancelled_at=%s reason=%s refund=%s",
            booking_id[-6:], updated.name, updated.phone, now.isoformat(),
            reason or "No reason provided", format_rupiah(updated.total_price)
        )
        await BookingService._notify_admin(
            db, "booking_cancelled", updated,
            {"phone": updated.phone, "reason": cancel_reason, "refund_amount": updated.total_price}
        )
        return updated

    @staticmethod
    async def send_reminder(db: Session, booking_id: str) -> Dict[str, Any]:
        booking = BookingService.get_booking(db, booking_id)
        if booking.status not in CANCELLABLE_STATUSES:
            raise InvalidStateError(
                f"Reminders are only sent for pending or confirmed bookings. Status: {booking.status}",
                current_status=booking.status
            )
        return await BookingService._notify_customer(booking, NotificationKind.REMINDER)

    @staticmethod
    def delete_booking(db: Session, booking_id: str) -> None:
        if not BookingRepo.delete(db, booking_id):
            raise NotFoundError("Booking", booking_id)
        logger.warning(f"Booking {booking_id} deleted by admin")

    @staticmethod
    async def _notify_customer(booking: Booking, kind: NotificationKind) -> Dict[str, Any]:
        """Best effort: a failed notification never fails the booking operation"""
        try:
            result = await NotificationService.send_notification(NotificationData.from_booking(booking), kind)
        except Exception as e:
            logger.error(f"Failed to send {kind.value} notification for booking {booking.id}: {e}")
            return {"success": False, "error": str(e)}

        if not result["success"]:
            logger.warning(f"Notification {kind.value} for booking {booking.id} partially failed")
        return result

    @staticmethod
    async def _notify_admin(db: Session, notification_type: str, booking: Booking, data: Dict[str, Any]):
        try:
            await AdminNotificationService.create_and_send_notification(
                db, notification_type, booking.id, booking.name, booking.service_name, data
            )
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create admin notification {notification_type} for booking {booking.id}: {e}")
