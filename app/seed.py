"""
Seed the database with a demo wheel

    python -m app.seed
"""

import logging

from app.core.db import Base, SessionLocal, engine
from app.models import Wheel
from app.services.wheel_service import WheelService

logger = logging.getLogger(__name__)

DEMO_WHEEL = "Launch Celebration"
DEMO_ENTRIES = [
    ("Team Lunch Voucher", "Alex", 2),
    ("Extra Vacation Day", "Jordan", 1),
    ("Coffee Gift Card", "Sam", 3),
    ("Work From Home Friday", "Riley", 1),
]


def seed(db) -> bool:
    """Create the demo wheel unless any wheel exists. Returns True if it seeded."""
    if db.query(Wheel).first() is not None:
        logger.info("Database already seeded. Skipping.")
        return False

    service = WheelService(db)
    wheel = service.create_wheel(DEMO_WHEEL, 5)
    for label, person_name, count in DEMO_ENTRIES:
        service.add_entries(wheel.id, label, person_name, count)
    logger.info(f"Seeded wheel {wheel.id} '{DEMO_WHEEL}'")
    return True


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
