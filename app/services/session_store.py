"""
Admin session store: persistence for session records keyed by opaque id
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models import AdminSession


class AdminSessionStore:
    """SQLAlchemy-backed key-value store for admin sessions.

    Holds no expiry policy of its own; callers pass the instant to compare
    against.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, session_id: str) -> Optional[AdminSession]:
        return self.db.query(AdminSession).filter(AdminSession.id == session_id).first()

    def create(self, session_id: str, created_at: datetime, expires_at: datetime) -> AdminSession:
        session = AdminSession(
            id=session_id,
            created_at=created_at,
            last_used_at=created_at,
            expires_at=expires_at
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def extend(self, session_id: str, used_at: datetime, expires_at: datetime) -> Optional[AdminSession]:
        """Slide a live session forward; ``None`` if it is gone or already dead at ``used_at``.

        The row is only updated while it still exists and has not expired, so a
        concurrent delete always wins.
        """
        updated = self.db.query(AdminSession).filter(
            AdminSession.id == session_id,
            AdminSession.expires_at > used_at
        ).update(
            {AdminSession.last_used_at: used_at, AdminSession.expires_at: expires_at},
            synchronize_session=False
        )
        self.db.commit()
        if not updated:
            return None
        session = self.get(session_id)
        if session is not None:
            self.db.refresh(session)
        return session

    def delete(self, session_id: str) -> bool:
        deleted = self.db.query(AdminSession).filter(
            AdminSession.id == session_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return bool(deleted)

    def delete_expired(self, now: datetime) -> int:
        deleted = self.db.query(AdminSession).filter(
            AdminSession.expires_at <= now
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted
