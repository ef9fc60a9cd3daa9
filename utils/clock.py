# utils/clock.py - Naive UTC timestamps shared by tables and services
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time without tzinfo, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
