# repository/admin.py - Session-based admin authentication
import secrets
from datetime import timedelta
from sqlalchemy.orm import Session
from sqlalchemy import and_
from tables.admin_sessions import AdminSession
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from config import (
    get_db, SECRET_KEY, ALGORITHM, ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_PASSWORD_HASH,
    ADMIN_SESSION_HOURS, MAX_ADMIN_SESSIONS
)
from utils.clock import utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
security = HTTPBearer()

_admin_password_hash = ADMIN_PASSWORD_HASH or pwd_context.hash(ADMIN_PASSWORD)


def verify_admin_credentials(username: str, password: str) -> bool:
    if not secrets.compare_digest(username, ADMIN_USERNAME):
        return False
    return pwd_context.verify(password, _admin_password_hash)


class SessionRepo:
    @staticmethod
    def create_session(db: Session, username: str, device_info: str = None, ip_address: str = None):
        """Create a new admin session"""
        session_token = secrets.token_urlsafe(64)

        # Clean up old sessions if the admin has too many
        SessionRepo.cleanup_sessions(db, username)

        session = AdminSession(
            username=username,
            session_token=session_token,
            device_info=device_info,
            ip_address=ip_address
        )

        db.add(session)
        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def get_session_by_token(db: Session, session_token: str):
        """Get active, unexpired session by token"""
        session = db.query(AdminSession).filter(
            and_(
                AdminSession.session_token == session_token,
                AdminSession.is_active == True
            )
        ).first()

        if session and session.last_accessed < utcnow() - timedelta(hours=ADMIN_SESSION_HOURS):
            session.is_active = False
            db.commit()
            return None
        return session

    @staticmethod
    def update_session_access(db: Session, session: AdminSession):
        session.last_accessed = utcnow()
        db.commit()

    @staticmethod
    def invalidate_session(db: Session, session_token: str):
        """Invalidate a session (logout)"""
        session = db.query(AdminSession).filter(
            AdminSession.session_token == session_token
        ).first()

        if session:
            session.is_active = False
            db.commit()
            return True
        return False

    @staticmethod
    def cleanup_sessions(db: Session, username: str):
        """Keep only the most recent MAX_ADMIN_SESSIONS sessions"""
        active_sessions = db.query(AdminSession).filter(
            and_(
                AdminSession.username == username,
                AdminSession.is_active == True
            )
        ).order_by(AdminSession.last_accessed.desc()).all()

        if len(active_sessions) >= MAX_ADMIN_SESSIONS:
            for session in active_sessions[MAX_ADMIN_SESSIONS - 1:]:
                session.is_active = False
            db.commit()


class JWTRepo:
    @staticmethod
    def generate_session_token(session_token: str):
        """Generate JWT token that contains session reference"""
        payload = {
            "session": session_token,
            "type": "admin_session"
        }
        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

    @staticmethod
    def verify_session_token(token: str):
        """Verify JWT token and extract session token"""
        try:
            payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
            session_token = payload.get("session")
            token_type = payload.get("type")

            if session_token is None or token_type != "admin_session":
                raise JWTError("Invalid token format")

            return session_token
        except JWTError:
            return None


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> AdminSession:
    """Resolve the admin session behind the bearer token"""
    session_token = JWTRepo.verify_session_token(credentials.credentials)

    if session_token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = SessionRepo.get_session_by_token(db, session_token)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    SessionRepo.update_session_access(db, session)
    return session
