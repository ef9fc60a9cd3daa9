# tables/admin_sessions.py - Admin login sessions referenced by JWTs
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from config import Base
from utils.clock import utcnow


class AdminSession(Base):
    __tablename__ = 'admin_sessions'

    id = Column(Integer, primary_key=True)
    username = Column(String(80), nullable=False)
    session_token = Column(String(255), unique=True, nullable=False)
    device_info = Column(String(500))  # Store device/browser info
    ip_address = Column(String(45))    # Store IP address (IPv6 compatible)
    created_at = Column(DateTime, default=utcnow)
    last_accessed = Column(DateTime, default=utcnow)
    is_active = Column(Boolean, default=True)
