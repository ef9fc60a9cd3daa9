# models/notifications.py - Pydantic models for notifications
from pydantic import BaseModel, validator
from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum


class NotificationKind(str, Enum):
    NEW_BOOKING = "new_booking"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    REMINDER = "reminder"


class NotificationData(BaseModel):
    """Booking snapshot handed to the customer notification channels"""
    phone: str
    name: str
    booking_id: str
    service_name: str
    date: str
    time: str
    address: str
    total_price: int
    status: str

    @classmethod
    def from_booking(cls, booking) -> "NotificationData":
        return cls(
            phone=booking.phone,
            name=booking.name,
            booking_id=booking.id,
            service_name=booking.service_name,
            date=booking.date,
            time=booking.time,
            address=booking.address,
            total_price=booking.total_price,
            status=booking.status
        )

    @property
    def short_id(self) -> str:
        return self.booking_id[-6:]


class AdminNotificationRequest(BaseModel):
    type: str
    booking_id: Optional[str] = None
    customer_name: Optional[str] = None
    service_name: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @validator('type')
    def validate_type(cls, v):
        if not v or not v.strip():
            raise ValueError('Notification type is required')
        if len(v) > 50:
            raise ValueError('Notification type cannot exceed 50 characters')
        return v.strip()


class AdminNotificationResponse(BaseModel):
    id: int
    type: str
    booking_id: Optional[str]
    customer_name: Optional[str]
    service_name: Optional[str]
    message: str
    data: Optional[Dict[str, Any]]
    is_read: bool
    push_success: bool
    created_at: datetime


class NotificationStats(BaseModel):
    total_notifications: int
    unread_count: int
    recent_count: int  # Last 24 hours
