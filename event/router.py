from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from user.models import User
from .schema import EventSchema, EventCreatePayload, EventCreate, OccurrenceSchema
from event import service

event_router = APIRouter(prefix="/events", tags=["Events"])

@event_router.post("", response_model=EventSchema, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreatePayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    internal = EventCreate(owner_email=user.email, **payload.model_dump())
    return service.create_event(db, internal)

# Occurrences visible to the caller in [start, end] (declared before /{event_id})
@event_router.get("/calendar", response_model=list[OccurrenceSchema])
def calendar(
    start: date = Query(..., description="First day of the window"),
    end: Optional[date] = Query(None, description="Last day of the window, defaults to start"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    return [
        OccurrenceSchema(
            event_id=occ.event.id,
            name=occ.event.name,
            date=occ.date,
            start_time=occ.event.start_time,
            end_time=occ.event.end_time,
            owner_email=occ.event.owner_email,
            visibility=occ.event.visibility,
            location_name=occ.event.location_name,
            is_recurring_occurrence=bool(occ.event.recurring),
        )
        for occ in service.calendar_for(db, user, start, end)
    ]

@event_router.get("/user/{email}", response_model=list[EventSchema])
def list_user_events(
    email: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    # other people's calendars only show their public events
    public_only = email.lower() != user.email and not user.is_admin
    return service.list_user_events(db, email, public_only=public_only)

@event_router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    service.delete_event(db, event_id, user.email)
    return {"message": "Event deleted successfully", "event_id": event_id}
