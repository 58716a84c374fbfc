from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.core.config import Settings
from app.core.dependencies import get_current_admin, get_event_service, get_settings
from app.schemas.event import EventCreate, EventFilters, EventOut, EventUpdate
from app.services.event_service import EventService
from app.utils.image_utils import read_image_upload

router = APIRouter(prefix="/events", tags=["Events"])


def event_json(event) -> dict:
    return EventOut.from_model(event).to_json()


# =====================================================================
# LIST EVENTS (Public)
# =====================================================================
@router.get("")
def list_events(
    category: Optional[str] = None,
    featured: Optional[str] = None,
    is_active: Optional[str] = Query(None, alias="isActive"),
    events: EventService = Depends(get_event_service),
):
    filters = EventFilters(
        category=category,
        featured=None if featured is None else featured == "true",
        # public listing shows active events unless asked otherwise
        is_active=is_active != "false",
    )
    results = events.list(filters)

    return {
        "success": True,
        "count": len(results),
        "data": [event_json(e) for e in results],
    }


# =====================================================================
# EVENT DETAILS (Public)
# =====================================================================
@router.get("/{event_id}")
def get_event(event_id: int, events: EventService = Depends(get_event_service)):
    return {"success": True, "data": event_json(events.get(event_id))}


# =====================================================================
# CREATE EVENT (Admin Only)
# =====================================================================
@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(get_current_admin)])
def create_event(
    title: str = Form(...),
    description: str = Form(...),
    category: str = Form(...),
    date: datetime = Form(...),
    featured: bool = Form(False),
    order: int = Form(0),
    image: Optional[UploadFile] = File(None),
    events: EventService = Depends(get_event_service),
    settings: Settings = Depends(get_settings),
):
    data = EventCreate(
        title=title,
        description=description,
        category=category,
        date=date,
        featured=featured,
        order=order,
    )
    upload = read_image_upload(image, settings.max_image_size_bytes)
    event = events.create(data, upload)

    return {
        "success": True,
        "message": "Event created successfully",
        "data": event_json(event),
    }


# =====================================================================
# UPDATE EVENT (Admin Only)
# =====================================================================
@router.put("/{event_id}", dependencies=[Depends(get_current_admin)])
def update_event(
    event_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    date: Optional[datetime] = Form(None),
    featured: Optional[bool] = Form(None),
    order: Optional[int] = Form(None),
    is_active: Optional[bool] = Form(None, alias="isActive"),
    image: Optional[UploadFile] = File(None),
    events: EventService = Depends(get_event_service),
    settings: Settings = Depends(get_settings),
):
    data = EventUpdate(
        title=title,
        description=description,
        category=category,
        date=date,
        featured=featured,
        order=order,
        is_active=is_active,
    )
    upload = read_image_upload(image, settings.max_image_size_bytes)
    event = events.update(event_id, data, upload)

    return {
        "success": True,
        "message": "Event updated successfully",
        "data": event_json(event),
    }


# =====================================================================
# DELETE EVENT (Admin Only)
# =====================================================================
@router.delete("/{event_id}", dependencies=[Depends(get_current_admin)])
def delete_event(event_id: int, events: EventService = Depends(get_event_service)):
    events.delete(event_id)
    return {"success": True, "message": "Event deleted successfully"}


# =====================================================================
# TOGGLE ACTIVE (Admin Only)
# =====================================================================
@router.patch("/{event_id}/toggle-active", dependencies=[Depends(get_current_admin)])
def toggle_event_status(event_id: int, events: EventService = Depends(get_event_service)):
    event = events.toggle_active(event_id)

    return {
        "success": True,
        "message": f"Event {'activated' if event.is_active else 'deactivated'} successfully",
        "data": event_json(event),
    }
