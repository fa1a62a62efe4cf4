"""
Security utilities and authentication
"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import AdminAuthRequired, MissingCredentials, InvalidCredentials
from app.services.session_service import AdminSessionManager, short_id
from app.services.session_store import AdminSessionStore

logger = logging.getLogger(__name__)

# Static admin secret for service-to-service calls
security = HTTPBearer(auto_error=False)

def get_session_manager(db: Session = Depends(get_db)) -> AdminSessionManager:
    """Session manager bound to the request's database session"""
    return AdminSessionManager(
        AdminSessionStore(db),
        admin_token=settings.ADMIN_TOKEN,
        ttl=timedelta(seconds=settings.ADMIN_SESSION_TTL_SECONDS)
    )

def require_admin(
    x_admin_session: Optional[str] = Header(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    manager: AdminSessionManager = Depends(get_session_manager)
) -> str:
    """Gate for mutating endpoints.

    A session id is touched (and therefore extended) on every call. A bearer
    token must equal the admin secret and never creates a session.
    """
    try:
        if x_admin_session:
            manager.require(x_admin_session)
            return "session"
        if credentials is not None:
            if not manager.validate_static_token(credentials.credentials):
                raise InvalidCredentials("Invalid admin token")
            return "token"
        raise MissingCredentials("Missing admin session")
    except AdminAuthRequired as e:
        logger.warning(f"Admin request rejected ({e.reason}) session={short_id(x_admin_session)}")
        raise
