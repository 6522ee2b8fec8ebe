from __future__ import annotations
import calendar
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import extract, select, update
from sqlalchemy.orm import Session

from auth.utils.auth_utils import get_password_hash
from core.config_loader import settings
from core.errors import NotFound
from department.models import Department
from user.models import User
from user.schemas import UserCreate, UserProfileUpdate


def get_users(db: Session, *, department_id: Optional[int] = None) -> list[User]:
    stmt = select(User)
    if department_id is not None:
        stmt = stmt.where(User.department_id == department_id)
    stmt = stmt.order_by(User.first_name, User.last_name, User.id)
    return list(db.scalars(stmt))


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email.lower())).first()


def create_user(db: Session, user: UserCreate, *, is_admin: bool = False) -> User:
    db_user = User(
        email=str(user.email).lower(),
        first_name=user.first_name,
        last_name=user.last_name,
        password_hash=get_password_hash(user.password),
        department_id=user.department_id,
        birth_date=user.birth_date,
        is_admin=is_admin,
        paid_leave_days_remaining=settings.DEFAULT_PAID_LEAVE_DAYS,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


# -------- profile --------

def update_profile(db: Session, user_id: int, patch: UserProfileUpdate) -> User:
    db_user = db.get(User, user_id)
    if db_user is None:
        raise NotFound("User not found")
    changes = patch.model_dump(exclude_unset=True)
    if changes.get("department_id") is not None and db.get(Department, changes["department_id"]) is None:
        raise NotFound("Department not found")
    for field, value in changes.items():
        setattr(db_user, field, value)
    db.commit()
    db.refresh(db_user)
    return db_user


def set_profile_picture(db: Session, user_id: int, path: str) -> User:
    db_user = db.get(User, user_id)
    if db_user is None:
        raise NotFound("User not found")
    db_user.profile_picture = path
    db.commit()
    db.refresh(db_user)
    return db_user


def _birthday_in(year: int, born: date) -> date:
    # Feb 29 birthdays are celebrated on Feb 28 in common years.
    if born.month == 2 and born.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return born.replace(year=year)


def birthdays_in_month(db: Session, year: int, month: int) -> list[tuple[User, date]]:
    """Active employees whose birthday falls in `month` of `year`, ordered by day."""
    stmt = (
        select(User)
        .where(
            User.is_active.is_(True),
            User.birth_date.is_not(None),
            extract("month", User.birth_date) == month,
        )
        .order_by(User.first_name, User.last_name, User.id)
    )
    found = [(u, _birthday_in(year, u.birth_date)) for u in db.scalars(stmt)]
    found.sort(key=lambda pair: pair[1])
    return found


def birthdays_on(db: Session, day: date) -> list[User]:
    return [u for u, d in birthdays_in_month(db, day.year, day.month) if d == day]


# -------- balance store --------

def lock_user_row(db: Session, email: str) -> User | None:
    """
    Load the employee row with a write lock held until the surrounding
    transaction ends (SELECT ... FOR UPDATE; SQLite ignores the clause).
    """
    stmt = (
        select(User)
        .where(User.email == email.lower())
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return db.scalars(stmt).first()


def adjust_paid_leave_balance(db: Session, email: str, delta: int) -> bool:
    """
    Add `delta` days to the employee's paid-leave balance in one conditional
    UPDATE. Returns False, changing nothing, when the result would be negative.
    Does not commit.
    """
    if delta == 0:
        return True
    stmt = (
        update(User)
        .where(
            User.email == email.lower(),
            User.paid_leave_days_remaining + delta >= 0,
        )
        .values(
            paid_leave_days_remaining=User.paid_leave_days_remaining + delta,
            last_leave_balance_update=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    return db.execute(stmt).rowcount == 1
