"""
Wheel and entry routes - reads are public, mutations require an admin session
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models import Entry, Wheel
from app.schemas.wheel import (
    WheelCreate, WheelUpdate, EntryCreate, EntryUpdate, EntryResponse, WheelResponse
)
from app.services.wheel_service import WheelService
from app.utils.responses import success_response, no_content
from app.utils.security import require_admin
from app.utils.slug import assign_slugs

router = APIRouter()

def serialize_entry(entry: Entry) -> dict:
    return EntryResponse.model_validate(entry).model_dump(mode="json")

def serialize_wheel(wheel: Wheel, slug: str) -> dict:
    return WheelResponse(
        id=wheel.id,
        name=wheel.name,
        slug=slug,
        spin_duration_seconds=wheel.spin_duration_seconds,
        created_at=wheel.created_at,
        entry_count=len(wheel.entries),
        active_entry_count=len(WheelService.active_entries(wheel)),
        entries=[EntryResponse.model_validate(entry) for entry in wheel.entries]
    ).model_dump(mode="json")

def serialize_wheels(wheels: List[Wheel]) -> List[dict]:
    slugs = assign_slugs((wheel.id, wheel.name) for wheel in wheels)
    return [serialize_wheel(wheel, slug) for wheel, slug in zip(wheels, slugs)]

@router.get("")
async def list_wheels(db: Session = Depends(get_db)):
    """List all wheels with their entries"""
    wheels = WheelService(db).list_wheels()
    return success_response(
        message="Wheels retrieved successfully",
        data=serialize_wheels(wheels)
    )

@router.get("/{wheel_id}")
async def get_wheel(wheel_id: int, db: Session = Depends(get_db)):
    """Get one wheel with its entries"""
    service = WheelService(db)
    wheel = service.get_wheel(wheel_id)
    return success_response(
        message="Wheel retrieved successfully",
        data=serialize_wheel(wheel, service.slug_of(wheel))
    )

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_wheel(
    body: WheelCreate,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Create a new, empty wheel"""
    service = WheelService(db)
    wheel = service.create_wheel(body.name, body.spin_duration_seconds)
    return success_response(
        message="Wheel created successfully",
        data=serialize_wheel(wheel, service.slug_of(wheel)),
        status_code=status.HTTP_201_CREATED
    )

@router.patch("/{wheel_id}")
async def update_wheel(
    wheel_id: int,
    body: WheelUpdate,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Update wheel name and/or spin duration"""
    service = WheelService(db)
    wheel = service.update_wheel(
        wheel_id,
        name=body.name,
        spin_duration_seconds=body.spin_duration_seconds
    )
    return success_response(
        message="Wheel updated successfully",
        data=serialize_wheel(wheel, service.slug_of(wheel))
    )

@router.delete("/{wheel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wheel(
    wheel_id: int,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Delete a wheel and all of its entries"""
    WheelService(db).delete_wheel(wheel_id)
    return no_content()

@router.post("/{wheel_id}/entries", status_code=status.HTTP_201_CREATED)
async def add_entries(
    wheel_id: int,
    body: EntryCreate,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Add one or more entries for a person"""
    entries = WheelService(db).add_entries(wheel_id, body.label, body.person_name, body.count)
    return success_response(
        message=f"{len(entries)} entries added",
        data=[serialize_entry(entry) for entry in entries],
        status_code=status.HTTP_201_CREATED
    )

@router.patch("/{wheel_id}/entries/{entry_id}")
async def update_entry(
    wheel_id: int,
    entry_id: int,
    body: EntryUpdate,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Update label, person or disabled flag of an entry"""
    entry = WheelService(db).update_entry(
        wheel_id,
        entry_id,
        label=body.label,
        person_name=body.person_name,
        disabled=body.disabled
    )
    return success_response(
        message="Entry updated successfully",
        data=serialize_entry(entry)
    )

@router.delete("/{wheel_id}/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    wheel_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    auth: str = Depends(require_admin)
):
    """Delete a single entry"""
    WheelService(db).delete_entry(wheel_id, entry_id)
    return no_content()
