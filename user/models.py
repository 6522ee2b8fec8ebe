from __future__ import annotations
from datetime import date, datetime
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Boolean, Date, DateTime, ForeignKey, CheckConstraint, text
from core.database import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(64), nullable=False)
    last_name: Mapped[str] = mapped_column(String(64), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # profile
    birth_date: Mapped[date | None] = mapped_column(Date(), nullable=True)
    bio: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    profile_picture: Mapped[str | None] = mapped_column(String(512), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text("true"), default=True, nullable=False)

    # role: admin or regular employee
    is_admin: Mapped[bool] = mapped_column(Boolean, server_default=text("false"), default=False, nullable=False)

    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"), index=True, nullable=True
    )

    # paid-leave ledger balance, only moved by leave request status transitions
    paid_leave_days_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_leave_balance_update: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    department = relationship("Department", back_populates="employees")

    __table_args__ = (
        CheckConstraint("paid_leave_days_remaining >= 0", name="ck_users_paid_leave_nonneg"),
    )
