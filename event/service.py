from __future__ import annotations
import logging
from datetime import date
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from core.errors import Forbidden, NotFound, UnprocessableInput
from department.models import Department
from user.models import User
from .models import Event, EventInvitation, EventVisibility
from .recurrence import Occurrence, expand_events
from .schema import EventCreate

logger = logging.getLogger(__name__)

# widest calendar window served in one call
MAX_CALENDAR_DAYS = 366


def get_event(db: Session, event_id: int) -> Event | None:
    return db.get(Event, event_id)


def list_user_events(db: Session, owner_email: str, *, public_only: bool = False) -> list[Event]:
    stmt = select(Event).where(Event.owner_email == owner_email.lower())
    if public_only:
        stmt = stmt.where(Event.visibility == EventVisibility.public)
    stmt = stmt.order_by(Event.date, Event.start_time, Event.id)
    return list(db.scalars(stmt))


def create_event(db: Session, data: EventCreate) -> Event:
    invitees: list[User] = []
    if data.invitations:
        ids = set(data.invitations)
        invitees = list(db.scalars(select(User).where(User.id.in_(ids))))
        if len(invitees) != len(ids):
            raise UnprocessableInput("Invitations reference unknown users")
    if data.invite_department_id is not None and db.get(Department, data.invite_department_id) is None:
        raise UnprocessableInput("Invited department does not exist")

    row = Event(
        owner_email=data.owner_email.lower(),
        name=data.name,
        description=data.description,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        location_name=data.location.name if data.location else None,
        latitude=data.location.latitude if data.location else None,
        longitude=data.location.longitude if data.location else None,
        visibility=data.visibility,
        invite_department_id=data.invite_department_id,
        recurring=data.recurring,
        frequency=data.frequency,
        original_date=data.original_date,
        invitees=invitees,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Event %s created by %s (%s)", row.id, row.owner_email, row.visibility.value)
    return row


def delete_event(db: Session, event_id: int, acting_email: str) -> None:
    row = get_event(db, event_id)
    if row is None:
        raise NotFound("Event not found")
    if row.owner_email != acting_email.lower():
        raise Forbidden("Not authorized to delete this event")
    db.delete(row)
    db.commit()
    logger.info("Event %s deleted by %s", event_id, acting_email)


def visible_events(db: Session, viewer: User, start: date, end: date) -> list[Event]:
    """
    Events the viewer may see that can produce a date inside [start, end]:
    their own, every public one, and private ones they are invited to
    directly or through their department.
    """
    invited = select(EventInvitation.event_id).where(EventInvitation.user_id == viewer.id)
    private = Event.visibility == EventVisibility.private
    audience = [
        Event.owner_email == viewer.email,
        Event.visibility == EventVisibility.public,
        and_(private, Event.id.in_(invited)),
    ]
    if viewer.department_id is not None:
        audience.append(and_(private, Event.invite_department_id == viewer.department_id))

    in_window = or_(
        and_(Event.recurring.is_(False), Event.date >= start, Event.date <= end),
        and_(Event.recurring.is_(True), func.coalesce(Event.original_date, Event.date) <= end),
    )
    stmt = select(Event).where(or_(*audience), in_window).order_by(Event.date, Event.id)
    return list(db.scalars(stmt))


def calendar_for(db: Session, viewer: User, start: date, end: Optional[date] = None) -> list[Occurrence]:
    end = end or start
    if end < start:
        raise UnprocessableInput("end must be on or after start")
    if (end - start).days >= MAX_CALENDAR_DAYS:
        raise UnprocessableInput(f"Calendar window is limited to {MAX_CALENDAR_DAYS} days")
    return expand_events(visible_events(db, viewer, start, end), start, end)
