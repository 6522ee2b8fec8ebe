from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException

from .models import Department
from .schema import DepartmentCreatePayload, DepartmentSchema, DepartmentDetailSchema
from user.models import User

def _employee_counts(db: Session) -> dict[int, int]:
    rows = db.execute(
        select(User.department_id, func.count(User.id))
        .where(User.department_id.is_not(None))
        .group_by(User.department_id)
    )
    return {dept_id: count for dept_id, count in rows}

def list_departments(db: Session) -> List[DepartmentSchema]:
    counts = _employee_counts(db)
    stmt = select(Department).order_by(Department.name.asc())
    return [
        DepartmentSchema(
            id=d.id,
            name=d.name,
            number_of_employees=counts.get(d.id, 0),
            max_employees_on_leave=d.max_employees_on_leave,
            current_employees_on_leave=d.current_employees_on_leave,
        )
        for d in db.scalars(stmt)
    ]

def get_department(db: Session, department_id: int) -> Optional[Department]:
    return db.get(Department, department_id)

def get_department_by_name(db: Session, name: str) -> Optional[Department]:
    return db.scalars(select(Department).where(Department.name == name)).first()

def get_department_detail(db: Session, name: str) -> Optional[DepartmentDetailSchema]:
    dept = get_department_by_name(db, name)
    if not dept:
        return None
    return DepartmentDetailSchema(
        id=dept.id,
        name=dept.name,
        number_of_employees=len(dept.employees),
        max_employees_on_leave=dept.max_employees_on_leave,
        current_employees_on_leave=dept.current_employees_on_leave,
        employees=dept.employees,
    )

def create_department(db: Session, dto: DepartmentCreatePayload) -> Department:
    dept = Department(
        name=dto.name.strip(),
        max_employees_on_leave=dto.max_employees_on_leave,
        current_employees_on_leave=0,
    )
    db.add(dept)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Department already exists")
    db.refresh(dept)
    return dept
