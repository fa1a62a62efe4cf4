"""
Wheel model
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base, utcnow

class Wheel(Base):
    __tablename__ = "wheels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    spin_duration_seconds = Column(Integer, nullable=False, default=5)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    entries = relationship(
        "Entry",
        back_populates="wheel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Entry.id"
    )

    @property
    def active_entries(self):
        return [entry for entry in self.entries if not entry.disabled]
