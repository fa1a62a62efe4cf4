"""
Admin session Pydantic schemas
"""

from datetime import datetime
from pydantic import BaseModel

class SessionCreate(BaseModel):
    """Login request carrying the admin secret"""
    token: str = ""

class AdminSessionResponse(BaseModel):
    session_id: str
    created_at: datetime
    last_used_at: datetime
    expires_at: datetime

    @classmethod
    def from_model(cls, session) -> "AdminSessionResponse":
        return cls(
            session_id=session.id,
            created_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at
        )
