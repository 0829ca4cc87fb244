# graphql_schema/types.py
from datetime import date, datetime
from typing import List, Optional

import strawberry

from models.employee import EmployeeView
from models.envelope import FieldError as FieldErrorModel, OperationResult
from models.user import UserView


@strawberry.type
class FieldError:
    field: str
    message: str

    @classmethod
    def from_model(cls, error: FieldErrorModel) -> "FieldError":
        return cls(field=error.field, message=error.message)


@strawberry.type
class User:
    id: strawberry.ID = strawberry.field(name="_id")
    username: str
    email: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_view(cls, user: UserView) -> "User":
        return cls(
            id=strawberry.ID(user.id),
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@strawberry.type
class Employee:
    id: strawberry.ID = strawberry.field(name="_id")
    first_name: str
    last_name: str
    email: str
    gender: str
    designation: str
    salary: Optional[float]
    date_of_joining: Optional[date]
    department: str
    employee_photo: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_view(cls, employee: EmployeeView) -> "Employee":
        return cls(
            id=strawberry.ID(employee.id),
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            gender=employee.gender,
            designation=employee.designation,
            salary=employee.salary,
            date_of_joining=employee.date_of_joining,
            department=employee.department,
            employee_photo=employee.employee_photo,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


def _errors(result: OperationResult) -> Optional[List[FieldError]]:
    if result.errors is None:
        return None
    return [FieldError.from_model(e) for e in result.errors]


@strawberry.type
class AuthResponse:
    success: bool
    message: str
    errors: Optional[List[FieldError]] = None
    token: Optional[str] = None
    user: Optional[User] = None

    @classmethod
    def from_result(cls, result: OperationResult) -> "AuthResponse":
        return cls(
            success=result.success,
            message=result.message,
            errors=_errors(result),
            token=result.token,
            user=User.from_view(result.user) if result.user else None,
        )


@strawberry.type
class EmployeeResponse:
    success: bool
    message: str
    errors: Optional[List[FieldError]] = None
    employee: Optional[Employee] = None

    @classmethod
    def from_result(cls, result: OperationResult) -> "EmployeeResponse":
        return cls(
            success=result.success,
            message=result.message,
            errors=_errors(result),
            employee=Employee.from_view(result.employee) if result.employee else None,
        )


@strawberry.type
class EmployeesResponse:
    success: bool
    message: str
    employees: List[Employee]
    count: int

    @classmethod
    def from_result(cls, result: OperationResult) -> "EmployeesResponse":
        return cls(
            success=result.success,
            message=result.message,
            employees=[Employee.from_view(e) for e in result.employees or []],
            count=result.count or 0,
        )


@strawberry.type
class DeleteResponse:
    success: bool
    message: str

    @classmethod
    def from_result(cls, result: OperationResult) -> "DeleteResponse":
        return cls(success=result.success, message=result.message)


@strawberry.input
class LoginInput:
    username_or_email: str = strawberry.field(name="usernameOrEmail")
    password: str


@strawberry.input
class SignupInput:
    username: str
    email: str
    password: str


@strawberry.input
class EmployeeInput:
    first_name: str
    last_name: str
    email: str
    gender: str
    designation: str
    salary: float
    date_of_joining: str
    department: str
    employee_photo_base64: Optional[str] = None


@strawberry.input
class EmployeeUpdateInput:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    designation: Optional[str] = None
    salary: Optional[float] = None
    date_of_joining: Optional[str] = None
    department: Optional[str] = None
    employee_photo_base64: Optional[str] = None
