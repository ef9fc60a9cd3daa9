# services/rating_service.py - Rating submission and moderation workflow
import logging
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from repository.bookings import BookingRepo
from repository.ratings import RatingRepo
from services.exceptions import ValidationError, NotFoundError, InvalidStateError, DuplicateRatingError
from tables.bookings import Booking
from tables.ratings import Rating
from utils.clock import utcnow
from utils.notification_service import AdminNotificationService

logger = logging.getLogger(__name__)

RATING_STATUSES = ("pending", "approved", "rejected")
ACTIVE_RATING_STATUSES = ("pending", "approved")
MODERATION_ACTIONS = {"approve": "approved", "reject": "rejected"}
MIN_COMMENT_LENGTH = 10


class RatingService:

    @staticmethod
    async def submit_rating(
        db: Session,
        booking_id: str,
        customer_name: str,
        rating: int,
        comment: str,
        now: Optional[datetime] = None
    ) -> Rating:
        """Create a pending rating and mark the rated booking completed"""
        if not booking_id:
            raise ValidationError("Field bookingId is required", field="booking_id")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Field customerName is required", field="customer_name")
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5", field="rating")
        comment = (comment or "").strip()
        if len(comment) < MIN_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment must be at least {MIN_COMMENT_LENGTH} characters", field="comment"
            )

        booking = BookingRepo.find_by_id(db, booking_id)
        if not booking:
            raise NotFoundError("Booking", booking_id)

        existing = RatingRepo.find_by_booking_id(db, booking_id)
        if any(r.status in ACTIVE_RATING_STATUSES for r in existing):
            raise DuplicateRatingError(booking_id)

        now = now or utcnow()
        # Staged on the session so the rating insert and the completion commit together
        RatingService.complete_booking_for_rating(db, booking, now)
        try:
            created = RatingRepo.create(db, Rating(
                booking_id=booking_id,
                customer_name=customer_name.strip(),
                service_name=booking.service_name,
                rating=rating,
                comment=comment,
                status="pending",
                created_at=now,
                updated_at=now
            ))
        except IntegrityError:
            # Lost the race against a concurrent submission for the same booking
            raise DuplicateRatingError(booking_id)

        logger.info(f"Rating {created.id} submitted for booking {booking_id} ({rating} stars)")

        try:
            await AdminNotificationService.create_and_send_notification(
                db, "new_rating", booking_id, created.customer_name, created.service_name,
                {"rating": rating}
            )
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create admin notification for rating {created.id}: {e}")

        return created

    @staticmethod
    def complete_booking_for_rating(db: Session, booking: Booking, now: datetime) -> Booking:
        """A rated booking is treated as served, whatever status it had before.

        Changes are left uncommitted; the caller commits them with the rating.
        """
        if booking.status != "completed":
            logger.info(f"Booking {booking.id} marked completed by rating submission (was {booking.status})")
        booking.status = "completed"
        booking.cancelled_at = None
        booking.cancel_reason = None
        booking.updated_at = now
        return booking

    @staticmethod
    def moderate_rating(db: Session, rating_id: str, action: str, now: Optional[datetime] = None) -> Rating:
        rating = RatingRepo.find_by_id(db, rating_id)
        if not rating:
            raise NotFoundError("Rating", rating_id)

        new_status = MODERATION_ACTIONS.get(action)
        if not new_status:
            raise ValidationError("Invalid action. Must be approve or reject", field="action")

        if rating.status != "pending":
            raise InvalidStateError(
                f"Rating has already been moderated. Status: {rating.status}",
                current_status=rating.status
            )

        updated = RatingRepo.update(db, rating_id, {"status": new_status, "updated_at": now or utcnow()})
        logger.info(f"Rating {rating_id} {new_status}")
        return updated

    @staticmethod
    def delete_rating(db: Session, rating_id: str) -> None:
        if not RatingRepo.delete(db, rating_id):
            raise NotFoundError("Rating", rating_id)
        logger.info(f"Rating {rating_id} deleted")

    @staticmethod
    def list_public(db: Session) -> List[Rating]:
        return RatingRepo.find_by_status(db, "approved")

    @staticmethod
    def list_for_moderation(db: Session, status: Optional[str] = None) -> List[Rating]:
        if status:
            if status not in RATING_STATUSES:
                raise ValidationError(f"Status must be one of: {', '.join(RATING_STATUSES)}", field="status")
            return RatingRepo.find_by_status(db, status)
        return RatingRepo.get_all(db)

    @staticmethod
    def get_summary(db: Session) -> Dict:
        approved = RatingService.list_public(db)
        if not approved:
            return {"count": 0, "average": None}
        average = sum(r.rating for r in approved) / len(approved)
        return {"count": len(approved), "average": round(average, 1)}
