# tables/bookings.py - Home-visit grooming bookings
from sqlalchemy import Column, Integer, DateTime, String, Text
from config import Base
from utils.clock import utcnow
import uuid


def generate_id():
    return str(uuid.uuid4())


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(120), nullable=False, index=True)
    phone = Column(String(30), nullable=False, index=True)
    address = Column(Text, nullable=False)

    # Service snapshot taken from the catalog at booking time
    service = Column(String(50), nullable=False)
    service_name = Column(String(120), nullable=False)
    total_price = Column(Integer, nullable=False)

    date = Column(String(20), nullable=False)  # Requested visit date, as submitted
    time = Column(String(10), nullable=False)  # Requested visit time, as submitted
    notes = Column(Text, default="")

    status = Column(String(20), default="pending", index=True)  # pending, confirmed, in-progress, completed, cancelled
    cancelled_at = Column(DateTime, nullable=True)
    cancel_reason = Column(String(200), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
