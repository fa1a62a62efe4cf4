"""
Tests for the admin session lifecycle
"""

import pytest
from datetime import datetime, timedelta
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, create_db_engine
from app.core.errors import AdminAuthRequired, InvalidCredentials, SessionExpired
from app.models import AdminSession
from app.services.session_service import AdminSessionManager
from app.services.session_store import AdminSessionStore

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_admin_sessions.db"
engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_TOKEN = "s3cret-admin"
TTL = timedelta(days=30)

class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0))

@pytest.fixture
def manager(db_session, clock):
    return AdminSessionManager(AdminSessionStore(db_session), admin_token=ADMIN_TOKEN, ttl=TTL, clock=clock)

def test_issue_creates_session_with_full_ttl(manager, clock):
    session = manager.issue(ADMIN_TOKEN)

    assert session.id
    assert session.created_at == clock.now
    assert session.last_used_at == clock.now
    assert session.expires_at == clock.now + TTL

def test_issue_generates_unique_ids(manager):
    ids = {manager.issue(ADMIN_TOKEN).id for _ in range(5)}
    assert len(ids) == 5

@pytest.mark.parametrize("token", ["", None, "wrong", ADMIN_TOKEN + " "])
def test_issue_rejects_bad_token(manager, db_session, token):
    with pytest.raises(InvalidCredentials) as exc_info:
        manager.issue(token)

    assert isinstance(exc_info.value, AdminAuthRequired)
    assert db_session.query(AdminSession).count() == 0

def test_touch_slides_expiry_from_now(manager, clock):
    """expires_at becomes touch time + TTL regardless of the prior expiry"""
    session = manager.issue(ADMIN_TOKEN)
    created_at = session.created_at

    clock.advance(days=12, minutes=7)
    touched = manager.touch(session.id)

    assert touched is not None
    assert touched.last_used_at == clock.now
    assert touched.expires_at == clock.now + TTL
    assert touched.created_at == created_at

    clock.advance(hours=1)
    touched_again = manager.touch(session.id)
    assert touched_again.expires_at == clock.now + TTL

def test_touch_keeps_session_alive_past_original_expiry(manager, clock):
    session = manager.issue(ADMIN_TOKEN)

    for _ in range(3):
        clock.advance(days=20)
        assert manager.touch(session.id) is not None

    # 60 days after issue, still alive thanks to sliding expiry
    assert manager.touch(session.id) is not None

def test_touch_expired_session_deletes_it(manager, db_session, clock):
    session = manager.issue(ADMIN_TOKEN)
    session_id = session.id

    clock.advance(days=30)  # expires_at == now counts as expired
    assert manager.touch(session_id) is None
    assert db_session.query(AdminSession).filter(AdminSession.id == session_id).first() is None

    # still gone even if the clock could somehow go back
    clock.advance(days=-1)
    assert manager.touch(session_id) is None

def test_touch_unknown_or_missing_id(manager):
    assert manager.touch("does-not-exist") is None
    assert manager.touch("") is None
    assert manager.touch(None) is None

def test_require_raises_session_expired(manager, clock):
    session = manager.issue(ADMIN_TOKEN)
    assert manager.require(session.id).id == session.id

    clock.advance(days=31)
    with pytest.raises(SessionExpired):
        manager.require(session.id)

def test_touch_does_not_recreate_revoked_session(manager, db_session, clock):
    """A delete that lands between the read and the update wins"""
    store = manager.store
    session = manager.issue(ADMIN_TOKEN)
    session_id = session.id

    original_extend = store.extend

    def revoke_then_extend(*args, **kwargs):
        store.delete(session_id)
        return original_extend(*args, **kwargs)

    store.extend = revoke_then_extend
    clock.advance(minutes=1)

    assert manager.touch(session_id) is None
    assert db_session.query(AdminSession).count() == 0

def test_revoke_is_idempotent(manager, db_session):
    session = manager.issue(ADMIN_TOKEN)

    manager.revoke(session.id)
    manager.revoke(session.id)
    manager.revoke("never-existed")
    manager.revoke(None)

    assert db_session.query(AdminSession).count() == 0
    assert manager.touch(session.id) is None

def test_issue_prunes_expired_sessions(manager, db_session, clock):
    old = manager.issue(ADMIN_TOKEN)
    old_id = old.id
    clock.advance(days=10)
    recent = manager.issue(ADMIN_TOKEN)
    recent_id = recent.id

    clock.advance(days=25)  # old expired, recent still live
    manager.issue(ADMIN_TOKEN)

    ids = {row.id for row in db_session.query(AdminSession).all()}
    assert old_id not in ids
    assert recent_id in ids
    assert len(ids) == 2

def test_prune_failure_does_not_block_login(manager, db_session):
    from sqlalchemy.exc import OperationalError

    def broken_delete_expired(now):
        raise OperationalError("DELETE", {}, Exception("database is locked"))

    manager.store.delete_expired = broken_delete_expired

    session = manager.issue(ADMIN_TOKEN)
    assert db_session.query(AdminSession).filter(AdminSession.id == session.id).count() == 1

def test_static_token_validation_does_not_touch_store(manager, db_session):
    assert manager.validate_static_token(ADMIN_TOKEN) is True
    assert manager.validate_static_token("nope") is False
    assert manager.validate_static_token(None) is False
    assert db_session.query(AdminSession).count() == 0
