# models/envelope.py
from pydantic import BaseModel
from typing import List, Optional

from models.user import UserView
from models.employee import EmployeeView

class FieldError(BaseModel):
    field: str
    message: str

class OperationResult(BaseModel):
    """Uniform response returned by every operation; unused payload fields stay None."""
    success: bool
    message: str
    errors: Optional[List[FieldError]] = None
    token: Optional[str] = None
    user: Optional[UserView] = None
    employee: Optional[EmployeeView] = None
    employees: Optional[List[EmployeeView]] = None
    count: Optional[int] = None

    @classmethod
    def ok(cls, message: str, **payload) -> "OperationResult":
        return cls(success=True, message=message, **payload)

    @classmethod
    def fail(cls, message: str, **payload) -> "OperationResult":
        return cls(success=False, message=message, **payload)
