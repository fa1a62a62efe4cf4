"""
Person model

People are never deleted when their last entry goes away; the table doubles as
a small directory of everyone ever credited on a wheel.
"""

from sqlalchemy import Column, Integer, String

from app.core.db import Base

class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # trimmed, lower-cased name; the only uniqueness rule for people
    name_key = Column(String(255), unique=True, nullable=False)
