# routes/ratings.py - Rating submission, testimonials and moderation
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from config import get_db
from models.ratings import RatingRequest, RatingResponse, ModerateRatingRequest, RatingSummary
from repository.admin import get_current_admin
from services.rating_service import RatingService
from tables.admin_sessions import AdminSession
from tables.ratings import Rating
from typing import Optional

router = APIRouter(prefix="/ratings", tags=["Ratings"])


def to_rating_response(rating: Rating) -> RatingResponse:
    return RatingResponse(
        id=rating.id,
        booking_id=rating.booking_id,
        customer_name=rating.customer_name,
        service_name=rating.service_name,
        rating=rating.rating,
        comment=rating.comment,
        status=rating.status,
        created_at=rating.created_at,
        updated_at=rating.updated_at
    )


@router.post("")
async def submit_rating(req: RatingRequest, db: Session = Depends(get_db)):
    """Rate a booking; the rating is published after moderation"""
    rating = await RatingService.submit_rating(
        db, req.booking_id, req.customer_name, req.rating, req.comment
    )
    return {
        "success": True,
        "rating": to_rating_response(rating),
        "message": "Thank you for your rating! Your review is valuable to us."
    }


@router.get("")
def list_public_ratings(db: Session = Depends(get_db)):
    """Approved ratings for the testimonial section"""
    ratings = RatingService.list_public(db)
    return {
        "success": True,
        "summary": RatingSummary(**RatingService.get_summary(db)),
        "ratings": [to_rating_response(r) for r in ratings]
    }


@router.get("/moderation")
def list_ratings_for_moderation(
    status: Optional[str] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    ratings = RatingService.list_for_moderation(db, status)
    return {"success": True, "ratings": [to_rating_response(r) for r in ratings]}


@router.post("/{rating_id}/moderate")
def moderate_rating(
    rating_id: str,
    req: ModerateRatingRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    rating = RatingService.moderate_rating(db, rating_id, req.action)
    return {
        "success": True,
        "rating": to_rating_response(rating),
        "message": f"Rating {rating.status}"
    }


@router.delete("/{rating_id}")
def delete_rating(
    rating_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    RatingService.delete_rating(db, rating_id)
    return {"success": True, "message": "Rating deleted"}
