# tables/ratings.py - Customer ratings awaiting or past moderation
from sqlalchemy import Column, Integer, DateTime, String, Text, Index, text
from config import Base
from tables.bookings import generate_id
from utils.clock import utcnow


class Rating(Base):
    __tablename__ = "ratings"

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), nullable=False, index=True)  # Validated on submit, no FK
    customer_name = Column(String(120), nullable=False)
    service_name = Column(String(120), nullable=False)  # Snapshot from the booking
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(Text, nullable=False)
    status = Column(String(20), default="pending", index=True)  # pending, approved, rejected

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # One pending/approved rating per booking; rejected ones don't count
    __table_args__ = (
        Index(
            "uq_ratings_active_booking",
            "booking_id",
            unique=True,
            postgresql_where=text("status != 'rejected'"),
            sqlite_where=text("status != 'rejected'"),
        ),
    )
