# repository/ratings.py - Rating persistence gateway
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from tables.ratings import Rating
from utils.clock import utcnow

logger = logging.getLogger(__name__)


class RatingRepo:
    @staticmethod
    def get_all(db: Session) -> List[Rating]:
        return db.query(Rating).order_by(Rating.created_at.desc()).all()

    @staticmethod
    def find_by_id(db: Session, rating_id: str) -> Optional[Rating]:
        return db.query(Rating).filter(Rating.id == rating_id).first()

    @staticmethod
    def find_by_booking_id(db: Session, booking_id: str) -> List[Rating]:
        return db.query(Rating).filter(
            Rating.booking_id == booking_id
        ).order_by(Rating.created_at.desc()).all()

    @staticmethod
    def find_by_status(db: Session, status: str) -> List[Rating]:
        return db.query(Rating).filter(
            Rating.status == status
        ).order_by(Rating.created_at.desc()).all()

    @staticmethod
    def create(db: Session, rating: Rating) -> Rating:
        """Insert a rating; IntegrityError from the active-rating index propagates"""
        try:
            db.add(rating)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(rating)
        return rating

    @staticmethod
    def update(db: Session, rating_id: str, updates: dict) -> Optional[Rating]:
        rating = RatingRepo.find_by_id(db, rating_id)
        if not rating:
            return None

        for key, value in updates.items():
            if key in ("id", "created_at"):
                continue
            setattr(rating, key, value)
        rating.updated_at = updates.get("updated_at") or utcnow()

        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to update rating {rating_id}")
            raise
        db.refresh(rating)
        return rating

    @staticmethod
    def delete(db: Session, rating_id: str) -> bool:
        rating = RatingRepo.find_by_id(db, rating_id)
        if not rating:
            return False
        try:
            db.delete(rating)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to delete rating {rating_id}")
            raise
        return True
