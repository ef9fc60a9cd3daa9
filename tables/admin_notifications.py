# tables/admin_notifications.py - Persisted admin dashboard notifications
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, JSON
from config import Base
from utils.clock import utcnow


class AdminNotification(Base):
    __tablename__ = 'admin_notifications'

    id = Column(Integer, primary_key=True)
    type = Column(String(50), nullable=False)  # new_booking, new_rating, booking_cancelled, etc.
    booking_id = Column(String(36), nullable=True, index=True)
    customer_name = Column(String(120), nullable=True)
    service_name = Column(String(120), nullable=True)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=True)  # Additional data for the notification
    is_read = Column(Boolean, default=False)
    push_success = Column(Boolean, default=False)  # Whether the FCM topic push went out
    created_at = Column(DateTime, default=utcnow)
