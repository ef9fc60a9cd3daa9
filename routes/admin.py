# routes/admin.py - Admin login/logout
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from config import get_db
from models.admin import AdminLogin, TokenResponse, ResponseSchema
from repository.admin import (
    SessionRepo, JWTRepo, verify_admin_credentials, get_current_admin
)
from tables.admin_sessions import AdminSession
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_client_info(request: Request):
    """Extract client information from request"""
    user_agent = request.headers.get('user-agent', 'Unknown')
    ip_address = request.client.host if request.client else 'Unknown'
    return user_agent[:500], ip_address


@router.post("/login", response_model=TokenResponse)
def login(request: AdminLogin, req: Request, db: Session = Depends(get_db)):
    if not verify_admin_credentials(request.username, request.password):
        logger.warning(f"Failed admin login for {request.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    device_info, ip_address = get_client_info(req)
    session = SessionRepo.create_session(db, request.username, device_info, ip_address)
    logger.info(f"Admin {request.username} logged in from {ip_address}")

    return TokenResponse(
        access_token=JWTRepo.generate_session_token(session.session_token),
        token_type="bearer"
    )


@router.post("/logout")
def logout(
    admin: AdminSession = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    SessionRepo.invalidate_session(db, admin.session_token)
    return ResponseSchema(
        code="200",
        status="OK",
        message="Logged out successfully"
    ).dict(exclude_none=True)
