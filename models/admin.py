# models/admin.py - Admin authentication models
from pydantic import BaseModel
from typing import Optional, Any


class AdminLogin(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str
    role: str = "admin"


class ResponseSchema(BaseModel):
    code: str
    status: str
    message: str
    result: Optional[Any] = None
