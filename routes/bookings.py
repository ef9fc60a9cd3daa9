# routes/bookings.py - Customer booking flow and admin booking management
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from config import get_db
from models.bookings import (
    BookingRequest, BookingResponse, CancelBookingRequest, UpdateBookingStatusRequest
)
from repository.admin import get_current_admin
from services.booking_service import BookingService, can_cancel, cancel_minutes_left
from tables.admin_sessions import AdminSession
from tables.bookings import Booking
from utils.clock import utcnow
from typing import Optional

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def to_booking_response(booking: Booking) -> BookingResponse:
    now = utcnow()
    return BookingResponse(
        id=booking.id,
        name=booking.name,
        phone=booking.phone,
        address=booking.address,
        service=booking.service,
        service_name=booking.service_name,
        date=booking.date,
        time=booking.time,
        notes=booking.notes or "",
        status=booking.status,
        total_price=booking.total_price,
        cancelled_at=booking.cancelled_at,
        cancel_reason=booking.cancel_reason,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
        can_cancel=can_cancel(booking, now),
        cancel_minutes_left=cancel_minutes_left(booking, now)
    )


@router.post("")
async def create_booking(req: BookingRequest, db: Session = Depends(get_db)):
    """Place a new home-visit grooming booking"""
    booking = await BookingService.create_booking(db, req.dict())
    return {
        "success": True,
        "booking": to_booking_response(booking),
        "message": "Booking created! We will contact you shortly to confirm."
    }


@router.get("/track")
def track_booking(
    query: str = Query(..., description="Phone number, booking id or name"),
    db: Session = Depends(get_db)
):
    """Look up bookings for the order tracking page"""
    bookings = BookingService.search_bookings(db, query)

    # A single match is returned as the booking itself
    if len(bookings) == 1:
        return {"success": True, "booking": to_booking_response(bookings[0])}

    return {"success": True, "bookings": [to_booking_response(b) for b in bookings]}


@router.get("")
def list_bookings(
    status: Optional[str] = Query(None, description="Filter by status"),
    search: Optional[str] = Query(None, description="Phone, id or name contains"),
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    """List bookings for the admin dashboard"""
    bookings = BookingService.list_bookings(db, status, search)
    return {
        "success": True,
        "total": len(bookings),
        "bookings": [to_booking_response(b) for b in bookings]
    }


@router.get("/{booking_id}")
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    booking = BookingService.get_booking(db, booking_id)
    return {"success": True, "booking": to_booking_response(booking)}


@router.post("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: str,
    req: CancelBookingRequest = CancelBookingRequest(),
    db: Session = Depends(get_db)
):
    """Cancel a booking (only within the cancellation window after ordering)"""
    booking = await BookingService.cancel_booking(db, booking_id, req.reason)
    return {
        "success": True,
        "message": "Booking cancelled successfully",
        "booking": to_booking_response(booking)
    }


@router.put("/{booking_id}/status")
async def update_booking_status(
    booking_id: str,
    req: UpdateBookingStatusRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    """Move a booking along its lifecycle"""
    old_status = BookingService.get_booking(db, booking_id).status
    booking = await BookingService.update_status(db, booking_id, req.status, req.reason)
    return {
        "success": True,
        "message": f"Status updated from {old_status} to {booking.status}",
        "booking": to_booking_response(booking)
    }


@router.post("/{booking_id}/remind")
async def send_booking_reminder(
    booking_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    """Send the customer a schedule reminder"""
    result = await BookingService.send_reminder(db, booking_id)
    return {"success": result["success"], "notification": result}


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    BookingService.delete_booking(db, booking_id)
    return {"success": True, "message": "Booking deleted"}
