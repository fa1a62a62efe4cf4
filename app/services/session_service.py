"""
Admin session lifecycle: issue, touch (sliding expiry), revoke
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.db import utcnow
from app.core.errors import InvalidCredentials, SessionExpired
from app.models import AdminSession
from app.services.session_store import AdminSessionStore

logger = logging.getLogger(__name__)


def short_id(session_id: Optional[str]) -> str:
    """Loggable prefix of a session id"""
    return f"{session_id[:8]}..." if session_id else "<none>"


class AdminSessionManager:
    """Issues and renews admin sessions against an explicit store.

    Every successful ``touch`` pushes ``expires_at`` to ``now + ttl``. Records
    past their expiry are treated as absent and deleted when next looked at;
    the only bulk cleanup is the prune that runs on each login.
    """

    def __init__(
        self,
        store: AdminSessionStore,
        admin_token: str,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow
    ):
        self.store = store
        self.admin_token = admin_token
        self.ttl = ttl
        self.clock = clock

    def validate_static_token(self, token: Optional[str]) -> bool:
        if not token or not self.admin_token:
            return False
        return secrets.compare_digest(token.encode("utf-8"), self.admin_token.encode("utf-8"))

    def issue(self, supplied_token: Optional[str]) -> AdminSession:
        """Exchange the admin secret for a new session"""
        if not self.validate_static_token(supplied_token):
            logger.warning("Admin login rejected (invalid)")
            raise InvalidCredentials("Invalid admin token")

        self.prune_expired()

        now = self.clock()
        session = self.store.create(secrets.token_urlsafe(32), now, now + self.ttl)
        logger.info(f"Issued admin session {short_id(session.id)} expiring {session.expires_at.isoformat()}")
        return session

    def prune_expired(self) -> int:
        """Best-effort bulk delete of dead sessions; failures are logged, not raised"""
        try:
            pruned = self.store.delete_expired(self.clock())
        except SQLAlchemyError as e:
            self.store.db.rollback()
            logger.warning(f"Pruning expired admin sessions failed: {e}")
            return 0
        if pruned:
            logger.info(f"Pruned {pruned} expired admin session(s)")
        return pruned

    def touch(self, session_id: Optional[str]) -> Optional[AdminSession]:
        """Validate and extend a session. ``None`` means absent or expired."""
        if not session_id:
            return None

        session = self.store.get(session_id)
        if session is None:
            return None

        now = self.clock()
        if session.expires_at <= now:
            self.store.delete(session_id)
            logger.info(f"Admin session {short_id(session_id)} expired, deleted")
            return None

        extended = self.store.extend(session_id, now, now + self.ttl)
        if extended is None:
            # deleted (revoke/prune) between the read and the update
            logger.info(f"Admin session {short_id(session_id)} vanished during touch")
        return extended

    def require(self, session_id: Optional[str]) -> AdminSession:
        session = self.touch(session_id)
        if session is None:
            raise SessionExpired("Admin session expired")
        return session

    def revoke(self, session_id: Optional[str]) -> None:
        if not session_id:
            return
        if self.store.delete(session_id):
            logger.info(f"Revoked admin session {short_id(session_id)}")
