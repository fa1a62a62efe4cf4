"""
Database models package
"""

from .wheel import Wheel
from .person import Person
from .entry import Entry
from .admin_session import AdminSession

__all__ = ["Wheel", "Person", "Entry", "AdminSession"]
