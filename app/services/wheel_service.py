"""
Wheel and entry mutation service
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFound, ValidationError
from app.models import Entry, Wheel
from app.services.person_directory import PersonDirectory
from app.services.repositories import EntryRepo, WheelRepo
from app.utils.slug import assign_slugs, slug_for

logger = logging.getLogger(__name__)

DEFAULT_SPIN_DURATION_SECONDS = 5


def coerce_positive_int(value: Any, default: int) -> int:
    """Best-effort integer coercion; anything unusable or below 1 gives ``default``"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class WheelService:
    """Creates, patches and deletes wheels and their entries"""

    def __init__(self, db: Session):
        self.db = db
        self.people = PersonDirectory(db)

    # -------- reads --------

    def list_wheels(self) -> List[Wheel]:
        return WheelRepo.list_all(self.db)

    def get_wheel(self, wheel_id: int) -> Wheel:
        wheel = WheelRepo.get_by_id(self.db, wheel_id)
        if not wheel:
            raise NotFound("Wheel")
        return wheel

    @staticmethod
    def active_entries(wheel: Wheel) -> List[Entry]:
        return wheel.active_entries

    def slug_of(self, wheel: Wheel) -> str:
        """The slug this wheel has in the listing, suffix included"""
        pairs = WheelRepo.list_names(self.db)
        slugs = dict(zip((wheel_id for wheel_id, _ in pairs), assign_slugs(pairs)))
        return slugs.get(wheel.id) or slug_for(wheel.id, wheel.name)

    # -------- wheels --------

    def create_wheel(self, name: Optional[str], spin_duration_seconds: Any = None) -> Wheel:
        name = _clean(name)
        if not name:
            raise ValidationError("Name is required", field="name")

        wheel = WheelRepo.create(
            self.db,
            name=name,
            spin_duration_seconds=coerce_positive_int(spin_duration_seconds, DEFAULT_SPIN_DURATION_SECONDS)
        )
        logger.info(f"Created wheel {wheel.id} '{wheel.name}'")
        return wheel

    def update_wheel(
        self,
        wheel_id: int,
        name: Optional[str] = None,
        spin_duration_seconds: Any = None
    ) -> Wheel:
        """Partial update; fields left as ``None`` keep their current value"""
        wheel = self.get_wheel(wheel_id)

        if name is not None:
            name = _clean(name)
            if not name:
                raise ValidationError("Name cannot be empty", field="name")
            wheel.name = name
        if spin_duration_seconds is not None:
            wheel.spin_duration_seconds = coerce_positive_int(
                spin_duration_seconds, DEFAULT_SPIN_DURATION_SECONDS
            )

        self.db.commit()
        self.db.refresh(wheel)
        return wheel

    def delete_wheel(self, wheel_id: int) -> None:
        wheel = self.get_wheel(wheel_id)
        WheelRepo.delete(self.db, wheel)
        logger.info(f"Deleted wheel {wheel_id} and its entries")

    # -------- entries --------

    def add_entries(
        self,
        wheel_id: int,
        label: Optional[str],
        person_name: Optional[str],
        count: Any = 1
    ) -> List[Entry]:
        """Create ``count`` identical entries credited to one person.

        Each entry is committed on its own; if one fails the error propagates
        and the entries already written stay.
        """
        wheel_id = self.get_wheel(wheel_id).id

        label = _clean(label)
        person_name = _clean(person_name)
        if not label:
            raise ValidationError("Label is required", field="label")
        if not person_name:
            raise ValidationError("person_name is required", field="person_name")

        count = coerce_positive_int(count, 1)
        person = self.people.find_or_create(person_name)
        person_id = person.id

        created = []
        for _ in range(count):
            created.append(EntryRepo.create(self.db, wheel_id, label, person_id))

        logger.info(f"Added {count} entr{'y' if count == 1 else 'ies'} '{label}' for person {person_id} to wheel {wheel_id}")
        return created

    def get_entry(self, wheel_id: int, entry_id: int) -> Entry:
        entry = EntryRepo.get_in_wheel(self.db, wheel_id, entry_id)
        if not entry:
            raise NotFound("Entry")
        return entry

    def update_entry(
        self,
        wheel_id: int,
        entry_id: int,
        label: Optional[str] = None,
        person_name: Optional[str] = None,
        disabled: Optional[bool] = None
    ) -> Entry:
        """Patch an entry. Blank label/person_name are ignored, never stored."""
        entry = self.get_entry(wheel_id, entry_id)

        person_name = _clean(person_name)
        if person_name:
            # rebinds the entry; the old person's name is left alone
            entry.person = self.people.find_or_create(person_name)

        label = _clean(label)
        if label:
            entry.label = label

        if disabled is not None:
            entry.disabled = bool(disabled)

        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_entry(self, wheel_id: int, entry_id: int) -> None:
        entry = self.get_entry(wheel_id, entry_id)
        EntryRepo.delete(self.db, entry)
        logger.info(f"Deleted entry {entry_id} from wheel {wheel_id}")
