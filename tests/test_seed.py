"""
Tests for demo data seeding
"""

import pytest
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, create_db_engine
from app.models import Entry, Person, Wheel
from app.seed import DEMO_WHEEL, seed

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_seed.db"
engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

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

def test_seed_creates_demo_wheel(db_session):
    assert seed(db_session) is True

    wheel = db_session.query(Wheel).one()
    assert wheel.name == DEMO_WHEEL
    assert db_session.query(Entry).count() == 7
    assert db_session.query(Person).count() == 4

def test_seed_skips_populated_database(db_session):
    seed(db_session)

    assert seed(db_session) is False
    assert db_session.query(Wheel).count() == 1
    assert db_session.query(Entry).count() == 7
