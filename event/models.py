from __future__ import annotations
import datetime as dt
from enum import Enum
from typing import TYPE_CHECKING, Optional
from sqlalchemy.sql import func
from sqlalchemy import (
    Boolean, Date, DateTime, Float, ForeignKey, Index, String, Text, Enum as SAEnum, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from user.models import User

class EventVisibility(str, Enum):
    personal = "personal"
    public = "public"
    private = "private"

class Frequency(str, Enum):
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"

class EventInvitation(Base):
    __tablename__ = "event_invitations"

    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,  # calendar lookups: WHERE user_id=...
    )

class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_email: Mapped[str] = mapped_column(
        ForeignKey("users.email", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    date: Mapped[dt.date] = mapped_column(Date(), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # "HH:mm"
    end_time:   Mapped[str] = mapped_column(String(5), nullable=False)

    location_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    visibility: Mapped[EventVisibility] = mapped_column(
        SAEnum(EventVisibility, name="event_visibility"),
        nullable=False,
        default=EventVisibility.personal,
    )
    invite_department_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )

    recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"), default=False)
    frequency: Mapped[Optional[Frequency]] = mapped_column(SAEnum(Frequency, name="event_frequency"), nullable=True)
    original_date: Mapped[Optional[dt.date]] = mapped_column(Date(), nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    invitees: Mapped[list["User"]] = relationship(
        "User",
        secondary="event_invitations",
        order_by="User.id",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_events_owner_date", "owner_email", "date"),
    )

    @property
    def invited_user_ids(self) -> list[int]:
        return [u.id for u in self.invitees]
