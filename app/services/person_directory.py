"""
Person directory: case-insensitive name -> stable person identity
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Person

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


class PersonDirectory:
    """Resolves display names to Person rows, creating them on first use"""

    def __init__(self, db: Session):
        self.db = db

    def find(self, name: str) -> Optional[Person]:
        return self.db.query(Person).filter(Person.name_key == normalize_name(name)).first()

    def find_or_create(self, name: str) -> Person:
        """Return the person called ``name`` (any casing), creating it if needed.

        The insert runs inside a SAVEPOINT. If another writer created the same
        name in the meantime the unique ``name_key`` rejects ours, the savepoint
        is rolled back and the other writer's row is returned.
        """
        display_name = name.strip()
        existing = self.find(display_name)
        if existing:
            return existing

        person = Person(name=display_name, name_key=normalize_name(display_name))
        try:
            with self.db.begin_nested():
                self.db.add(person)
        except IntegrityError:
            logger.info(f"Person '{display_name}' created concurrently, re-reading")
            existing = self.find(display_name)
            if existing is None:
                raise
            return existing

        logger.info(f"Created person {person.id} '{display_name}'")
        return person
