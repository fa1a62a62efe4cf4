"""
Pydantic schemas package
"""

from .common import *
from .session import *
from .wheel import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "SessionCreate",
    "AdminSessionResponse",
    "WheelCreate",
    "WheelUpdate",
    "EntryCreate",
    "EntryUpdate",
    "PersonResponse",
    "EntryResponse",
    "WheelResponse"
]
