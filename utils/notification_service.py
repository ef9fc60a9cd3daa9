# utils/notification_service.py - Persisted admin notifications with push
from sqlalchemy.orm import Session
from tables.admin_notifications import AdminNotification
from utils.firebase_service import FirebaseService
from utils.clock import utcnow
from config import ADMIN_NOTIFICATION_TOPIC
from datetime import timedelta
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)

TITLES = {
    "new_booking": "New Booking",
    "new_rating": "New Rating",
    "booking_cancelled": "Booking Cancelled",
}


def build_admin_message(
    notification_type: str,
    booking_id: Optional[str] = None,
    customer_name: Optional[str] = None,
    service_name: Optional[str] = None
) -> str:
    if notification_type == "new_rating":
        return f"⭐ New rating from {customer_name} for booking {booking_id}"
    if notification_type == "new_booking":
        return f"📋 New booking from {customer_name} for {service_name}"
    if notification_type == "booking_cancelled":
        return f"❌ {customer_name} cancelled booking {booking_id}"
    return f"Notification: {notification_type}"


class AdminNotificationService:

    @staticmethod
    async def create_and_send_notification(
        db: Session,
        notification_type: str,
        booking_id: Optional[str] = None,
        customer_name: Optional[str] = None,
        service_name: Optional[str] = None,
        additional_data: Optional[Dict[str, Any]] = None
    ) -> AdminNotification:
        """Create admin notification in DB and push it to the admin topic"""
        notification = AdminNotification(
            type=notification_type,
            booking_id=booking_id,
            customer_name=customer_name,
            service_name=service_name,
            message=build_admin_message(notification_type, booking_id, customer_name, service_name),
            data=additional_data or {}
        )

        db.add(notification)
        db.commit()
        db.refresh(notification)

        logger.info(f"🔔 Admin notification {notification.id} created: {notification.message}")

        push_data = {
            "notification_type": notification.type,
            "notification_id": str(notification.id),
            "booking_id": booking_id
        }
        result = await FirebaseService.send_to_topic(
            ADMIN_NOTIFICATION_TOPIC,
            TITLES.get(notification_type, "Notification"),
            notification.message,
            push_data
        )

        if result["success"]:
            notification.push_success = True
            db.commit()
            db.refresh(notification)
        else:
            logger.info(f"Admin push skipped for notification {notification.id}: {result['error']}")

        return notification

    @staticmethod
    def get_notifications(
        db: Session,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0
    ) -> List[AdminNotification]:
        query = db.query(AdminNotification)

        if unread_only:
            query = query.filter(AdminNotification.is_read == False)

        return query.order_by(
            AdminNotification.created_at.desc(), AdminNotification.id.desc()
        ).offset(offset).limit(limit).all()

    @staticmethod
    def mark_notification_read(db: Session, notification_id: int) -> bool:
        notification = db.query(AdminNotification).filter(
            AdminNotification.id == notification_id
        ).first()

        if notification:
            notification.is_read = True
            db.commit()
            logger.info(f"📖 Notification marked as read: {notification_id}")
            return True
        return False

    @staticmethod
    def mark_all_notifications_read(db: Session) -> int:
        updated = db.query(AdminNotification).filter(
            AdminNotification.is_read == False
        ).update({"is_read": True})
        db.commit()
        return updated

    @staticmethod
    def get_notification_stats(db: Session) -> Dict[str, int]:
        total = db.query(AdminNotification).count()
        unread = db.query(AdminNotification).filter(AdminNotification.is_read == False).count()

        recent_time = utcnow() - timedelta(hours=24)
        recent = db.query(AdminNotification).filter(
            AdminNotification.created_at >= recent_time
        ).count()

        return {
            "total_notifications": total,
            "unread_count": unread,
            "recent_count": recent
        }
