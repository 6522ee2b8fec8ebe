"""
Leave ledger arithmetic.

Everything here is pure: no session, no clock. The service module reads the
rows, asks these functions what should happen, and applies the answer inside
one transaction.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date

from core.errors import InvalidStatus, ValidationError
from .models import LeaveRequest, LeaveStatus, LeaveType


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive interval intersection; symmetric in its two ranges."""
    return a_start <= b_end and a_end >= b_start


def count_business_days(start: date, end: date) -> int:
    """Monday to Friday days in [start, end]. No holiday calendar."""
    if end < start:
        return 0
    total = (end - start).days + 1
    full_weeks, rest = divmod(total, 7)
    days = full_weeks * 5
    weekday = start.weekday()
    for offset in range(rest):
        if (weekday + offset) % 7 < 5:
            days += 1
    return days


def balance_delta(
    leave_type: LeaveType,
    from_status: LeaveStatus,
    to_status: LeaveStatus,
    business_days: int,
) -> int:
    if leave_type != LeaveType.paid or from_status == to_status:
        return 0
    if from_status == LeaveStatus.pending and to_status == LeaveStatus.approved:
        return -business_days
    if from_status == LeaveStatus.approved and to_status in (LeaveStatus.rejected, LeaveStatus.pending):
        return business_days
    # pending -> rejected, rejected -> anything: no balance effect
    return 0


def parse_status(value: str) -> LeaveStatus:
    try:
        return LeaveStatus((value or "").strip().lower())
    except ValueError:
        raise InvalidStatus(f"Invalid status '{value}'. Expected one of: pending, approved, rejected")


def check_dates(start: date, end: date, today: date) -> None:
    if start < today:
        raise ValidationError("Start date cannot be in the past")
    if end < start:
        raise ValidationError("End date must be on or after start date")


@dataclass(frozen=True)
class LeaveSnapshot:
    id: int
    owner_email: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus

    @classmethod
    def from_row(cls, row: LeaveRequest) -> "LeaveSnapshot":
        return cls(
            id=row.id,
            owner_email=row.owner_email,
            leave_type=LeaveType(row.leave_type),
            start_date=row.start_date,
            end_date=row.end_date,
            status=LeaveStatus(row.status),
        )

    @property
    def business_days(self) -> int:
        return count_business_days(self.start_date, self.end_date)


@dataclass(frozen=True)
class TransitionPlan:
    request_id: int
    owner_email: str
    from_status: LeaveStatus
    to_status: LeaveStatus
    delta: int

    @property
    def changes_balance(self) -> bool:
        return self.delta != 0

    @property
    def is_noop(self) -> bool:
        return self.from_status == self.to_status


def plan_transition(snapshot: LeaveSnapshot, new_status: LeaveStatus) -> TransitionPlan:
    return TransitionPlan(
        request_id=snapshot.id,
        owner_email=snapshot.owner_email,
        from_status=snapshot.status,
        to_status=new_status,
        delta=balance_delta(snapshot.leave_type, snapshot.status, new_status, snapshot.business_days),
    )

