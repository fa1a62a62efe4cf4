"""
Repository layer for wheels and entries.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from app.models import Entry, Wheel


# -------- Wheel repository --------

class WheelRepo:
    @staticmethod
    def list_all(db: Session) -> List[Wheel]:
        return db.query(Wheel).options(
            selectinload(Wheel.entries)
        ).order_by(Wheel.created_at, Wheel.id).all()

    @staticmethod
    def list_names(db: Session) -> List[Tuple[int, str]]:
        """``(id, name)`` pairs in listing order"""
        rows = db.query(Wheel.id, Wheel.name).order_by(Wheel.created_at, Wheel.id).all()
        return [(wheel_id, name) for wheel_id, name in rows]

    @staticmethod
    def get_by_id(db: Session, wheel_id: int) -> Optional[Wheel]:
        return db.query(Wheel).filter(Wheel.id == wheel_id).first()

    @staticmethod
    def create(db: Session, name: str, spin_duration_seconds: int) -> Wheel:
        wheel = Wheel(name=name, spin_duration_seconds=spin_duration_seconds)
        db.add(wheel)
        db.commit()
        db.refresh(wheel)
        return wheel

    @staticmethod
    def delete(db: Session, wheel: Wheel) -> None:
        db.delete(wheel)
        db.commit()


# -------- Entry repository --------

class EntryRepo:
    @staticmethod
    def get_in_wheel(db: Session, wheel_id: int, entry_id: int) -> Optional[Entry]:
        return db.query(Entry).filter(
            Entry.id == entry_id,
            Entry.wheel_id == wheel_id
        ).first()

    @staticmethod
    def create(db: Session, wheel_id: int, label: str, person_id: int) -> Entry:
        entry = Entry(wheel_id=wheel_id, label=label, person_id=person_id)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def delete(db: Session, entry: Entry) -> None:
        db.delete(entry)
        db.commit()
