from __future__ import annotations
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from document.schema import DocumentRef
from user.schemas import BalanceSchema
from .models import LeaveType, LeaveStatus


# ---------- DB → API (read) ----------
class LeaveRequestSchema(BaseModel):
    id: int
    owner_email: EmailStr
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    documents: List[DocumentRef] = []
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class RequestOwner(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    department_id: Optional[int] = None
    model_config = ConfigDict(from_attributes=True)


class LeaveRequestWithOwner(LeaveRequestSchema):
    owner: Optional[RequestOwner] = None


class TransitionResultSchema(BaseModel):
    request: LeaveRequestSchema
    balance: BalanceSchema


# ---------- Client → API ----------
class LeaveRequestCreatePayload(BaseModel):
    leave_type: LeaveType
    start_date: date
    end_date: date
    documents: List[DocumentRef] = Field(default_factory=list)
    model_config = ConfigDict(extra="forbid")


class StatusUpdatePayload(BaseModel):
    # plain str: unknown values surface as InvalidStatus (400) instead of a 422
    status: str
    model_config = ConfigDict(extra="forbid")


# ---------- Internal DTO (service layer) ----------
class LeaveRequestCreate(BaseModel):
    owner_email: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    documents: List[DocumentRef] = Field(default_factory=list)
