"""
Admin session routes - login, refresh, logout
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, status

from app.core.errors import SessionExpired, MissingCredentials
from app.schemas.session import SessionCreate, AdminSessionResponse
from app.services.session_service import AdminSessionManager, short_id
from app.utils.responses import success_response, no_content
from app.utils.security import get_session_manager

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/session", status_code=status.HTTP_201_CREATED)
async def create_session(
    body: SessionCreate,
    manager: AdminSessionManager = Depends(get_session_manager)
):
    """Exchange the admin token for a session"""
    session = manager.issue(body.token)
    return success_response(
        message="Admin session created",
        data=AdminSessionResponse.from_model(session).model_dump(mode="json"),
        status_code=status.HTTP_201_CREATED
    )

@router.post("/session/refresh")
async def refresh_session(
    x_admin_session: Optional[str] = Header(None),
    manager: AdminSessionManager = Depends(get_session_manager)
):
    """Validate the session and slide its expiry forward"""
    if not x_admin_session:
        logger.warning("Admin session refresh rejected (missing)")
        raise MissingCredentials("Missing admin session")

    session = manager.touch(x_admin_session)
    if session is None:
        logger.warning(f"Admin session refresh rejected (expired) session={short_id(x_admin_session)}")
        raise SessionExpired("Admin session expired")

    return success_response(
        message="Admin session refreshed",
        data=AdminSessionResponse.from_model(session).model_dump(mode="json")
    )

@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    x_admin_session: Optional[str] = Header(None),
    manager: AdminSessionManager = Depends(get_session_manager)
):
    """Revoke the session; unknown ids are fine"""
    manager.revoke(x_admin_session)
    return no_content()
