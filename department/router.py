from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin

from .schema import DepartmentSchema, DepartmentDetailSchema, DepartmentCreatePayload
from . import service

department_router = APIRouter(prefix="/departments", tags=["Departments"])

@department_router.get("", response_model=list[DepartmentSchema])
def list_departments(
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    return service.list_departments(db)

# Department details with its employees
@department_router.get("/{name}", response_model=DepartmentDetailSchema)
def department_detail(
    name: str,
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    obj = service.get_department_detail(db, name)
    if not obj:
        raise HTTPException(status_code=404, detail="Department not found")
    return obj

# Create department (admin only)
@department_router.post("", response_model=DepartmentSchema, status_code=status.HTTP_201_CREATED)
def department_post(
    payload: DepartmentCreatePayload,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if service.get_department_by_name(db, payload.name.strip()):
        raise HTTPException(status_code=409, detail="Department already exists")
    return service.create_department(db, payload)
