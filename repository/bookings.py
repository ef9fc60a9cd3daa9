# repository/bookings.py - Booking persistence gateway
import logging
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from tables.bookings import Booking
from utils.clock import utcnow

logger = logging.getLogger(__name__)

# Never rewritten after creation
IMMUTABLE_FIELDS = {"id", "total_price", "created_at"}


class BookingRepo:
    @staticmethod
    def get_all(db: Session) -> List[Booking]:
        return db.query(Booking).order_by(Booking.created_at.desc()).all()

    @staticmethod
    def find_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def find_by_field(db: Session, field: str, value) -> List[Booking]:
        column = getattr(Booking, field)
        return db.query(Booking).filter(column == value).order_by(Booking.created_at.desc()).all()

    @staticmethod
    def find_by_status(db: Session, status: str) -> List[Booking]:
        return BookingRepo.find_by_field(db, "status", status)

    @staticmethod
    def _contains(db: Session, column, query: str):
        # SQLite LIKE ignores case; instr keeps the match case-sensitive
        if db.get_bind().dialect.name == "sqlite":
            return func.instr(column, query) > 0
        return column.contains(query, autoescape=True)

    @staticmethod
    def search(db: Session, query: str, status: Optional[str] = None) -> List[Booking]:
        """Bookings whose phone, id or name contains the query (case-sensitive)"""
        q = db.query(Booking).filter(
            or_(
                BookingRepo._contains(db, Booking.phone, query),
                BookingRepo._contains(db, Booking.id, query),
                BookingRepo._contains(db, Booking.name, query)
            )
        )
        if status:
            q = q.filter(Booking.status == status)
        return q.order_by(Booking.created_at.desc()).all()

    @staticmethod
    def create(db: Session, booking: Booking) -> Booking:
        try:
            db.add(booking)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create booking")
            raise
        db.refresh(booking)
        return booking

    @staticmethod
    def update(db: Session, booking_id: str, updates: dict) -> Optional[Booking]:
        booking = BookingRepo.find_by_id(db, booking_id)
        if not booking:
            return None

        for key, value in updates.items():
            if key in IMMUTABLE_FIELDS:
                logger.warning(f"Ignoring update of immutable booking field {key} on {booking_id}")
                continue
            setattr(booking, key, value)
        booking.updated_at = updates.get("updated_at") or utcnow()

        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to update booking {booking_id}")
            raise
        db.refresh(booking)
        return booking

    @staticmethod
    def delete(db: Session, booking_id: str) -> bool:
        booking = BookingRepo.find_by_id(db, booking_id)
        if not booking:
            return False
        try:
            db.delete(booking)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to delete booking {booking_id}")
            raise
        return True

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Booking).count()
