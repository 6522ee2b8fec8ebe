from __future__ import annotations
import logging
from datetime import date
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.errors import (
    Forbidden,
    InsufficientBalance,
    InvalidState,
    NotFound,
    OverlappingRequest,
)
from core.locks import employee_locks
from document.schema import DocumentRef
from document.service import check_stored_path
from user.models import User
from user.service import adjust_paid_leave_balance, lock_user_row
from .ledger import LeaveSnapshot, check_dates, parse_status, plan_transition
from .models import LeaveDocument, LeaveRequest, LeaveStatus
from .schema import LeaveRequestCreate

logger = logging.getLogger(__name__)


def _today() -> date:
    return date.today()


def _document_row(ref: DocumentRef) -> LeaveDocument:
    row = LeaveDocument(filename=ref.filename, path=ref.path)
    if ref.uploaded_at is not None:
        row.uploaded_at = ref.uploaded_at
    return row


def get_request(db: Session, request_id: int) -> LeaveRequest | None:
    return db.get(LeaveRequest, request_id)


def find_overlapping(db: Session, owner_email: str, start: date, end: date) -> list[LeaveRequest]:
    # every status blocks, rejected included
    stmt = (
        select(LeaveRequest)
        .where(
            LeaveRequest.owner_email == owner_email.lower(),
            LeaveRequest.start_date <= end,
            LeaveRequest.end_date >= start,
        )
        .order_by(LeaveRequest.start_date, LeaveRequest.id)
    )
    return list(db.scalars(stmt))


def list_own(db: Session, owner_email: str) -> list[LeaveRequest]:
    stmt = (
        select(LeaveRequest)
        .where(LeaveRequest.owner_email == owner_email.lower())
        .order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
    )
    return list(db.scalars(stmt))


def list_all(db: Session) -> list[LeaveRequest]:
    stmt = select(LeaveRequest).order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
    return list(db.scalars(stmt).unique())


def submit_request(db: Session, data: LeaveRequestCreate, *, today: Optional[date] = None) -> LeaveRequest:
    owner = data.owner_email.lower()
    check_dates(data.start_date, data.end_date, today or _today())
    for doc in data.documents:
        check_stored_path(doc.path)

    with employee_locks.hold(owner):
        try:
            if lock_user_row(db, owner) is None:
                raise NotFound("User not found")
            conflicts = find_overlapping(db, owner, data.start_date, data.end_date)
            if conflicts:
                existing = conflicts[0]
                raise OverlappingRequest(
                    f"You already have a {existing.status.value} leave request from "
                    f"{existing.start_date.isoformat()} to {existing.end_date.isoformat()} "
                    "that overlaps these dates"
                )
            row = LeaveRequest(
                owner_email=owner,
                leave_type=data.leave_type,
                start_date=data.start_date,
                end_date=data.end_date,
                status=LeaveStatus.pending,
                documents=[_document_row(d) for d in data.documents],
            )
            db.add(row)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(row)
    logger.info(
        "Leave request %s submitted by %s (%s, %s..%s)",
        row.id, owner, row.leave_type.value, row.start_date, row.end_date,
    )
    return row


def transition_status(
    db: Session, request_id: int, new_status: str, acting_user: User
) -> tuple[LeaveRequest, User]:
    """
    Move a request to `new_status` and apply the paid-leave balance effect of
    that move. Status and balance are committed together or not at all.

    Returns the updated request and its owner with the fresh balance.
    """
    if not acting_user.is_admin:
        raise Forbidden("Access denied. Admin privileges required.")
    target = parse_status(new_status)

    row = get_request(db, request_id)
    if row is None:
        raise NotFound("Leave request not found")
    owner = row.owner_email

    with employee_locks.hold(owner):
        try:
            user = lock_user_row(db, owner)
            if user is None:
                raise NotFound("User not found")
            db.refresh(row)
            plan = plan_transition(LeaveSnapshot.from_row(row), target)

            if not adjust_paid_leave_balance(db, owner, plan.delta):
                raise InsufficientBalance(
                    f"Insufficient paid leave days: {user.paid_leave_days_remaining} remaining, "
                    f"{-plan.delta} requested"
                )
            if not plan.is_noop:
                result = db.execute(
                    update(LeaveRequest)
                    .where(LeaveRequest.id == plan.request_id, LeaveRequest.status == plan.from_status)
                    .values(status=plan.to_status)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise InvalidState("Leave request was modified concurrently")
            db.commit()
        except InsufficientBalance:
            db.rollback()
            logger.warning("Approval of request %s refused: insufficient balance for %s", request_id, owner)
            raise
        except Exception:
            db.rollback()
            raise

    db.refresh(row)
    db.refresh(user)
    logger.info(
        "Leave request %s: %s -> %s by %s (balance delta %+d)",
        plan.request_id, plan.from_status.value, plan.to_status.value, acting_user.email, plan.delta,
    )
    return row, user


def delete_request(db: Session, request_id: int, acting_email: str) -> None:
    row = get_request(db, request_id)
    if row is None:
        raise NotFound("Leave request not found")
    if row.owner_email != acting_email.lower():
        raise Forbidden("You can only delete your own leave requests")

    with employee_locks.hold(row.owner_email):
        try:
            lock_user_row(db, row.owner_email)
            db.refresh(row)
            if row.status != LeaveStatus.pending:
                raise InvalidState("Only pending requests can be deleted")
            db.delete(row)
            db.commit()
        except Exception:
            db.rollback()
            raise
    logger.info("Leave request %s deleted by %s", request_id, acting_email)

