"""
Admin session model
"""

from sqlalchemy import Column, String, DateTime

from app.core.db import Base

class AdminSession(Base):
    __tablename__ = "admin_sessions"

    id = Column(String(64), primary_key=True)
    created_at = Column(DateTime, nullable=False)
    last_used_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
