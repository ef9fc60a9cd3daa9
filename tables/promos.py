# tables/promos.py - Promotional offers shown on the landing page
from sqlalchemy import Column, Integer, DateTime, Date, String, Text, Boolean
from config import Base
from tables.bookings import generate_id
from utils.clock import utcnow


class Promo(Base):
    __tablename__ = "promos"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True)
    original_price = Column(Integer, nullable=False)
    discounted_price = Column(Integer, nullable=True)
    discount_percentage = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
