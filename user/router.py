from datetime import date

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile

from sqlalchemy.orm import Session

from auth.services.auth_service import get_current_active_user
from core.config_loader import settings
from core.database import get_db
from core.errors import Forbidden, UnprocessableInput
from document.service import store_image
from user.models import User
from authz.deps import require_admin
from user.schemas import BirthdaySchema, UserProfileUpdate, UserSchema
from user.service import (
    birthdays_in_month,
    birthdays_on,
    get_user,
    get_users,
    set_profile_picture,
    update_profile,
)

user_router = APIRouter(
    prefix='/users',
    tags=['Users']
)


def _birthday_row(user: User, day: date) -> BirthdaySchema:
    return BirthdaySchema(
        id=user.id,
        full_name=f"{user.first_name} {user.last_name}",
        profile_picture=user.profile_picture,
        birth_date=user.birth_date,
        birthday=day,
    )

# Get all employees (admin only)
@user_router.get('', response_model=list[UserSchema])
def user_list(db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return get_users(db)

# Get current user, including the paid-leave balance
@user_router.get('/me', response_model=UserSchema)
def user_me(current_user: User = Depends(get_current_active_user)):
    return current_user

# Birthdays in a month
@user_router.get('/birthdays/{year}/{month}', response_model=list[BirthdaySchema])
def user_birthdays_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_active_user),
):
    return [_birthday_row(u, d) for u, d in birthdays_in_month(db, year, month)]

# Birthdays on a single day
@user_router.get('/birthdays/{year}/{month}/{day}', response_model=list[BirthdaySchema])
def user_birthdays_day(
    year: int,
    month: int,
    day: int,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_active_user),
):
    try:
        when = date(year, month, day)
    except ValueError:
        raise UnprocessableInput(f"Invalid date: {year}-{month}-{day}")
    return [_birthday_row(u, when) for u in birthdays_on(db, when)]

# Update own profile
@user_router.put('/profile/{user_id}', response_model=UserSchema)
def user_profile_update(
    user_id: int,
    payload: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if current_user.id != user_id:
        raise Forbidden("Not authorized to update this profile")
    return update_profile(db, user_id, payload)

# Upload own profile picture
@user_router.post('/{user_id}/profile-picture', response_model=UserSchema)
def user_profile_picture(
    user_id: int,
    file: UploadFile = File(..., description="JPG or PNG, 5MB max"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if current_user.id != user_id:
        raise Forbidden("Not authorized to update this profile")
    path = store_image(file, settings.PROFILE_PICTURE_DIR)
    return set_profile_picture(db, user_id, path)

# Get user details
@user_router.get('/{user_id}', response_model=UserSchema)
def user_detail(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if current_user.id != user_id and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized to view this profile")
    db_user = get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user
