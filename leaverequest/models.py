from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING
from sqlalchemy.sql import func
from sqlalchemy import Date, DateTime, String, ForeignKey, Enum as SAEnum, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from user.models import User

class LeaveType(str, Enum):
    sick = "sick"
    paid = "paid"
    unpaid = "unpaid"
    study = "study"

class LeaveStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_email: Mapped[str] = mapped_column(
        ForeignKey("users.email", ondelete="CASCADE", onupdate="CASCADE"), index=True, nullable=False
    )
    leave_type: Mapped[LeaveType] = mapped_column(SAEnum(LeaveType, name="leave_type"), nullable=False)

    start_date: Mapped[date] = mapped_column(Date(), nullable=False)
    end_date:   Mapped[date] = mapped_column(Date(), nullable=False)

    status: Mapped[LeaveStatus] = mapped_column(
        SAEnum(LeaveStatus, name="leave_status"), nullable=False, default=LeaveStatus.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    owner: Mapped["User"] = relationship("User", lazy="joined")
    documents: Mapped[list["LeaveDocument"]] = relationship(
        "LeaveDocument",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="LeaveDocument.id",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_leave_requests_range"),
        Index("ix_leave_requests_owner_start", "owner_email", "start_date"),
    )

class LeaveDocument(Base):
    __tablename__ = "leave_documents"

    id: Mapped[int] = mapped_column(primary_key=True)
    request_id: Mapped[int] = mapped_column(
        ForeignKey("leave_requests.id", ondelete="CASCADE"), index=True, nullable=False
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(512), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    request: Mapped[LeaveRequest] = relationship("LeaveRequest", back_populates="documents")
