"""
Wheel and entry Pydantic schemas
"""

from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel

class WheelCreate(BaseModel):
    """Schema for creating a wheel"""
    name: str = ""
    # coerced by the service; anything non-numeric falls back to the default
    spin_duration_seconds: Optional[Any] = None

class WheelUpdate(BaseModel):
    """Partial wheel update"""
    name: Optional[str] = None
    spin_duration_seconds: Optional[Any] = None

class EntryCreate(BaseModel):
    """Schema for adding one or more identical entries"""
    label: str = ""
    person_name: str = ""
    count: Optional[Any] = 1

class EntryUpdate(BaseModel):
    """Blank label/person_name mean "no change", never "erase" """
    label: Optional[str] = None
    person_name: Optional[str] = None
    disabled: Optional[bool] = None

class PersonResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class EntryResponse(BaseModel):
    """Entry response schema"""
    id: int
    wheel_id: int
    label: str
    person: PersonResponse
    disabled: bool
    created_at: datetime

    class Config:
        from_attributes = True

class WheelResponse(BaseModel):
    """Wheel with its entries and derived counts"""
    id: int
    name: str
    slug: str
    spin_duration_seconds: int
    created_at: datetime
    entry_count: int
    active_entry_count: int
    entries: List[EntryResponse]
