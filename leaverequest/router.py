from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import Forbidden
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from user.models import User

from .schema import (
    LeaveRequestSchema,
    LeaveRequestWithOwner,
    LeaveRequestCreatePayload,
    LeaveRequestCreate,
    StatusUpdatePayload,
    TransitionResultSchema,
)
from leaverequest import service

leave_request_router = APIRouter(prefix="/requests", tags=["Leave requests"])

@leave_request_router.post("", response_model=LeaveRequestSchema, status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: LeaveRequestCreatePayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    internal = LeaveRequestCreate(owner_email=user.email, **payload.model_dump())
    return service.submit_request(db, internal)

# Admin overview, each request with its owner (declared before /{request_id} routes)
@leave_request_router.get("/all", response_model=list[LeaveRequestWithOwner])
def list_all_requests(db: Session = Depends(get_db), _admin: User = Depends(require_admin)):
    return service.list_all(db)

@leave_request_router.get("/user/{email}", response_model=list[LeaveRequestSchema])
def list_user_requests(
    email: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    if email.lower() != user.email and not user.is_admin:
        raise Forbidden("You can only view your own leave requests")
    return service.list_own(db, email)

@leave_request_router.patch("/{request_id}/status", response_model=TransitionResultSchema)
def update_request_status(
    request_id: int,
    payload: StatusUpdatePayload,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    row, owner = service.transition_status(db, request_id, payload.status, admin)
    return {"request": row, "balance": owner}

@leave_request_router.delete("/{request_id}")
def delete_request(
    request_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    service.delete_request(db, request_id, user.email)
    return {"message": "Leave request deleted"}
