from typing import List
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class DepartmentSchema(BaseModel):
    id: int
    name: str
    number_of_employees: int = 0
    max_employees_on_leave: int
    current_employees_on_leave: int
    model_config = ConfigDict(from_attributes=True)

class DepartmentMember(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: EmailStr
    is_admin: bool
    model_config = ConfigDict(from_attributes=True)

class DepartmentDetailSchema(DepartmentSchema):
    employees: List[DepartmentMember] = []

# what clients send
class DepartmentCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    max_employees_on_leave: int = Field(ge=1)
    model_config = ConfigDict(extra="forbid")
