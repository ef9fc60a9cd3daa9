# models/bookings.py - Booking request/response models
from pydantic import BaseModel, validator
from datetime import datetime
from typing import Optional


class BookingRequest(BaseModel):
    # Presence is checked by the booking service so the error names the field
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    service: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None

    @validator('notes')
    def validate_notes(cls, v):
        if v and len(v) > 500:
            raise ValueError('Notes cannot exceed 500 characters')
        return v

    @validator('name')
    def validate_name(cls, v):
        if v and len(v) > 120:
            raise ValueError('Name cannot exceed 120 characters')
        return v

    @validator('phone')
    def validate_phone(cls, v):
        if v and len(v) > 30:
            raise ValueError('Phone number cannot exceed 30 characters')
        return v


class BookingResponse(BaseModel):
    id: str
    name: str
    phone: str
    address: str
    service: str
    service_name: str
    date: str
    time: str
    notes: str
    status: str
    total_price: int
    cancelled_at: Optional[datetime] = None
    cancel_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    can_cancel: bool
    cancel_minutes_left: int


class CancelBookingRequest(BaseModel):
    reason: Optional[str] = None

    @validator('reason')
    def validate_reason(cls, v):
        if v and len(v) > 200:
            raise ValueError('Cancellation reason cannot exceed 200 characters')
        return v


class UpdateBookingStatusRequest(BaseModel):
    status: str
    reason: Optional[str] = None

    @validator('reason')
    def validate_reason(cls, v):
        if v and len(v) > 200:
            raise ValueError('Cancellation reason cannot exceed 200 characters')
        return v


class ServiceResponse(BaseModel):
    code: str
    name: str
    price: int
