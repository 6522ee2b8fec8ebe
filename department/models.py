from __future__ import annotations
from datetime import datetime
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, DateTime, CheckConstraint
from core.database import Base

class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)

    # capacity bookkeeping; approvals do not consult these
    max_employees_on_leave: Mapped[int] = mapped_column(Integer, nullable=False)
    current_employees_on_leave: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    employees = relationship("User", back_populates="department", order_by="User.first_name")

    __table_args__ = (
        CheckConstraint("max_employees_on_leave >= 1", name="ck_departments_max_on_leave"),
        CheckConstraint("current_employees_on_leave >= 0", name="ck_departments_current_on_leave"),
    )
