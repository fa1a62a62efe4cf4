"""
Entry model
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base, utcnow

class Entry(Base):
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, index=True)
    wheel_id = Column(Integer, ForeignKey("wheels.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(255), nullable=False)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    disabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    wheel = relationship("Wheel", back_populates="entries")
    person = relationship("Person", lazy="joined")
