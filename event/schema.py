import datetime as dt
import re
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from .models import EventVisibility, Frequency

TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def minutes_of(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class EventSchema(BaseModel):
    id: int
    owner_email: EmailStr
    name: str
    description: Optional[str] = None
    date: dt.date
    start_time: str
    end_time: str
    location_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    visibility: EventVisibility
    invite_department_id: Optional[int] = None
    invited_user_ids: List[int] = []
    recurring: bool = False
    frequency: Optional[Frequency] = None
    original_date: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = None
    model_config = ConfigDict(from_attributes=True)


class OccurrenceSchema(BaseModel):
    event_id: int
    name: str
    date: dt.date
    start_time: str
    end_time: str
    owner_email: EmailStr
    visibility: EventVisibility
    location_name: Optional[str] = None
    is_recurring_occurrence: bool = False


class LocationPayload(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    model_config = ConfigDict(extra="forbid")


# what clients send
class EventCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    date: dt.date
    start_time: str = Field(..., description="HH:mm, 24-hour")
    end_time: str = Field(..., description="HH:mm, 24-hour")
    location: Optional[LocationPayload] = None
    visibility: EventVisibility = EventVisibility.personal
    invitations: List[int] = Field(default_factory=list, description="Invited user ids")
    invite_department_id: Optional[int] = None
    recurring: bool = False
    frequency: Optional[Frequency] = None
    original_date: Optional[dt.date] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name is required")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def hh_mm(cls, v: str) -> str:
        m = TIME_RE.match(v.strip())
        if not m:
            raise ValueError(f"{v} is not a valid time format! Use HH:mm (24-hour format)")
        return f"{int(m.group(1)):02d}:{m.group(2)}"

    @model_validator(mode="after")
    def check_event(self):
        if minutes_of(self.end_time) <= minutes_of(self.start_time):
            raise ValueError("End time must be after start time")
        if self.recurring:
            if self.frequency is None:
                raise ValueError("frequency is required for recurring events")
            if self.original_date is None:
                self.original_date = self.date
        else:
            self.frequency = None
            self.original_date = None
        if self.visibility == EventVisibility.private:
            if not self.invitations and self.invite_department_id is None:
                raise ValueError("Private events need invitations or an invited department")
        else:
            self.invitations = []
            self.invite_department_id = None
        return self


# Internal DTO the service uses
class EventCreate(BaseModel):
    owner_email: str
    name: str
    description: Optional[str] = None
    date: dt.date
    start_time: str
    end_time: str
    location: Optional[LocationPayload] = None
    visibility: EventVisibility = EventVisibility.personal
    invitations: List[int] = Field(default_factory=list)
    invite_department_id: Optional[int] = None
    recurring: bool = False
    frequency: Optional[Frequency] = None
    original_date: Optional[dt.date] = None
