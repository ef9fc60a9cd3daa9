# utils/seed.py - Sample bookings and testimonials for a fresh database
import logging
from sqlalchemy.orm import Session
from repository.bookings import BookingRepo
from repository.ratings import RatingRepo
from services.catalog import get_service
from tables.bookings import Booking
from tables.ratings import Rating

logger = logging.getLogger(__name__)

SAMPLE_BOOKINGS = [
    {
        "name": "John Doe",
        "phone": "08123456789",
        "address": "Jl. Sudirman No. 123, Jakarta Pusat",
        "service": "mandi-biasa",
        "date": "2024-01-15",
        "time": "10:00",
        "notes": "My cat is a bit shy around strangers",
        "comment": "Very satisfying service! The groomer was friendly and patient with my cat. Neat result.",
    },
    {
        "name": "Sarah P.",
        "phone": "08123456788",
        "address": "Jl. Thamrin No. 456, Jakarta Selatan",
        "service": "mandi-kutu",
        "date": "2024-01-16",
        "time": "14:00",
        "notes": "Please give extra flea treatment",
        "comment": "So practical, no need to take my cat to the salon. Worth the price for this result.",
    },
    {
        "name": "Budi S.",
        "phone": "08123456787",
        "address": "Jl. Gatot Subroto No. 789, Jakarta Barat",
        "service": "mandi-grooming",
        "date": "2024-01-17",
        "time": "09:00",
        "notes": "Persian cat, long fur",
        "comment": "My cat is clean and smells great. The groomer was professional and on time. Recommended!",
    },
]


def seed_sample_data(db: Session) -> int:
    """Insert completed sample bookings with approved ratings into an empty database"""
    if BookingRepo.count(db) > 0:
        return 0

    for sample in SAMPLE_BOOKINGS:
        service = get_service(sample["service"])
        booking = BookingRepo.create(db, Booking(
            name=sample["name"],
            phone=sample["phone"],
            address=sample["address"],
            service=sample["service"],
            service_name=service["name"],
            total_price=service["price"],
            date=sample["date"],
            time=sample["time"],
            notes=sample["notes"],
            status="completed"
        ))
        RatingRepo.create(db, Rating(
            booking_id=booking.id,
            customer_name=booking.name,
            service_name=booking.service_name,
            rating=5,
            comment=sample["comment"],
            status="approved"
        ))

    logger.info(f"Sample data created: {len(SAMPLE_BOOKINGS)} bookings with ratings")
    return len(SAMPLE_BOOKINGS)
