from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.services.auth_service import authenticate_user, get_current_active_user
from auth.utils.auth_utils import create_access_token
from core.database import get_db
from user.models import User
from user.schemas import UserCreate, UserSchema
from user.service import create_user, get_user_by_email

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


@auth_router.post("/token", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token(user.email, extra={"admin": user.is_admin})
    return Token(access_token=token)


@auth_router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    if get_user_by_email(db, payload.email):
        raise HTTPException(status_code=409, detail="Email already exists")
    try:
        return create_user(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Email already exists")


class TokenCheck(BaseModel):
    valid: bool = True
    user: UserSchema


@auth_router.get("/validate-token", response_model=TokenCheck)
def validate_token(current_user: User = Depends(get_current_active_user)):
    return TokenCheck(user=UserSchema.model_validate(current_user))
