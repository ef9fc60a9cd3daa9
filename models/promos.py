# models/promos.py - Promo request/response models
from pydantic import BaseModel, validator
from datetime import date, datetime
from typing import Optional


class PromoRequest(BaseModel):
    title: str
    description: str = ""
    start_date: date
    end_date: date
    is_active: bool = True
    original_price: int
    discounted_price: Optional[int] = None
    discount_percentage: Optional[int] = None

    @validator('title')
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title is required')
        if len(v) > 200:
            raise ValueError('Title cannot exceed 200 characters')
        return v.strip()

    @validator('end_date')
    def validate_end_date(cls, v, values):
        if 'start_date' in values and v < values['start_date']:
            raise ValueError('End date cannot be before start date')
        return v

    @validator('original_price', 'discounted_price')
    def validate_price(cls, v):
        if v is not None and v < 0:
            raise ValueError('Prices cannot be negative')
        return v

    @validator('discount_percentage')
    def validate_percentage(cls, v):
        if v is not None and not 0 <= v <= 100:
            raise ValueError('Discount percentage must be between 0 and 100')
        return v


class PromoUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
    original_price: Optional[int] = None
    discounted_price: Optional[int] = None
    discount_percentage: Optional[int] = None

    @validator('original_price', 'discounted_price')
    def validate_price(cls, v):
        if v is not None and v < 0:
            raise ValueError('Prices cannot be negative')
        return v

    @validator('discount_percentage')
    def validate_percentage(cls, v):
        if v is not None and not 0 <= v <= 100:
            raise ValueError('Discount percentage must be between 0 and 100')
        return v


class PromoResponse(BaseModel):
    id: str
    title: str
    description: str
    start_date: date
    end_date: date
    is_active: bool
    original_price: int
    discounted_price: Optional[int]
    discount_percentage: Optional[int]
    created_at: datetime
    updated_at: datetime
