# models/ratings.py - Rating request/response models
from pydantic import BaseModel, StrictInt, validator
from datetime import datetime
from typing import Optional


class RatingRequest(BaseModel):
    booking_id: Optional[str] = None
    customer_name: Optional[str] = None
    rating: Optional[StrictInt] = None
    comment: Optional[str] = None

    @validator('comment')
    def validate_comment(cls, v):
        if v and len(v) > 1000:
            raise ValueError('Comment cannot exceed 1000 characters')
        return v


class RatingResponse(BaseModel):
    id: str
    booking_id: str
    customer_name: str
    service_name: str
    rating: int
    comment: str
    status: str
    created_at: datetime
    updated_at: datetime


class ModerateRatingRequest(BaseModel):
    action: str


class RatingSummary(BaseModel):
    count: int
    average: Optional[float] = None
