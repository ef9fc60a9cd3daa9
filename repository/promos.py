# repository/promos.py - Promo persistence gateway
import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from tables.promos import Promo
from utils.clock import utcnow

logger = logging.getLogger(__name__)


class PromoRepo:
    @staticmethod
    def get_all(db: Session) -> List[Promo]:
        return db.query(Promo).order_by(Promo.created_at.desc()).all()

    @staticmethod
    def find_by_id(db: Session, promo_id: str) -> Optional[Promo]:
        return db.query(Promo).filter(Promo.id == promo_id).first()

    @staticmethod
    def find_active(db: Session, today: date) -> List[Promo]:
        return db.query(Promo).filter(
            and_(
                Promo.is_active == True,
                Promo.start_date <= today,
                Promo.end_date >= today
            )
        ).order_by(Promo.created_at.desc()).all()

    @staticmethod
    def create(db: Session, promo: Promo) -> Promo:
        try:
            db.add(promo)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create promo")
            raise
        db.refresh(promo)
        return promo

    @staticmethod
    def update(db: Session, promo_id: str, updates: dict) -> Optional[Promo]:
        promo = PromoRepo.find_by_id(db, promo_id)
        if not promo:
            return None

        for key, value in updates.items():
            setattr(promo, key, value)
        promo.updated_at = utcnow()

        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to update promo {promo_id}")
            raise
        db.refresh(promo)
        return promo

    @staticmethod
    def delete(db: Session, promo_id: str) -> bool:
        promo = PromoRepo.find_by_id(db, promo_id)
        if not promo:
            return False
        try:
            db.delete(promo)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to delete promo {promo_id}")
            raise
        return True
