# routes/notifications.py - Admin dashboard notifications
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from config import get_db
from models.admin import ResponseSchema
from models.notifications import AdminNotificationRequest, AdminNotificationResponse, NotificationStats
from repository.admin import get_current_admin
from services.exceptions import NotFoundError
from tables.admin_notifications import AdminNotification
from tables.admin_sessions import AdminSession
from utils.notification_service import AdminNotificationService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/notifications", tags=["Notifications"])


def to_notification_response(n: AdminNotification) -> AdminNotificationResponse:
    return AdminNotificationResponse(
        id=n.id,
        type=n.type,
        booking_id=n.booking_id,
        customer_name=n.customer_name,
        service_name=n.service_name,
        message=n.message,
        data=n.data,
        is_read=n.is_read,
        push_success=n.push_success or False,
        created_at=n.created_at
    )


@router.get("")
def get_notifications(
    unread_only: bool = Query(False, description="Get only unread notifications"),
    limit: int = Query(50, description="Number of notifications to return", le=100),
    offset: int = Query(0, description="Number of notifications to skip"),
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    notifications = AdminNotificationService.get_notifications(db, unread_only, limit, offset)
    return {
        "success": True,
        "notifications": [to_notification_response(n) for n in notifications]
    }


@router.post("")
async def create_notification(
    req: AdminNotificationRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    notification = await AdminNotificationService.create_and_send_notification(
        db, req.type, req.booking_id, req.customer_name, req.service_name, req.data
    )
    return {"success": True, "notification": to_notification_response(notification)}


@router.get("/stats", response_model=NotificationStats)
def get_notification_stats(
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    return NotificationStats(**AdminNotificationService.get_notification_stats(db))


@router.put("/mark-all-read")
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    updated = AdminNotificationService.mark_all_notifications_read(db)
    return ResponseSchema(
        code="200",
        status="OK",
        message=f"{updated} notifications marked as read"
    ).dict(exclude_none=True)


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    if not AdminNotificationService.mark_notification_read(db, notification_id):
        raise NotFoundError("Notification", notification_id)

    return ResponseSchema(
        code="200",
        status="OK",
        message="Notification marked as read"
    ).dict(exclude_none=True)
