# graphql_schema/schema.py
from typing import Annotated, Optional

import strawberry
from strawberry.schema.config import StrawberryConfig

from graphql_schema.types import (
    AuthResponse,
    DeleteResponse,
    EmployeeInput,
    EmployeeResponse,
    EmployeesResponse,
    EmployeeUpdateInput,
    LoginInput,
    SignupInput,
)
from models import employee as employee_models
from models import user as user_models
from services import auth_service, employee_service


def to_employee_model(data) -> employee_models.EmployeeInput:
    return employee_models.EmployeeInput(**strawberry.asdict(data))


@strawberry.type
class Query:
    @strawberry.field(name="login")
    async def login(
        self,
        credentials: Annotated[LoginInput, strawberry.argument(name="input")],
    ) -> AuthResponse:
        result = await auth_service.login(user_models.LoginInput(
            username_or_email=credentials.username_or_email,
            password=credentials.password,
        ))
        return AuthResponse.from_result(result)

    @strawberry.field(name="getAllEmployees")
    async def get_all_employees(self) -> EmployeesResponse:
        return EmployeesResponse.from_result(await employee_service.get_all_employees())

    @strawberry.field(name="getEmployeeByEid")
    async def get_employee_by_eid(self, eid: strawberry.ID) -> EmployeeResponse:
        return EmployeeResponse.from_result(await employee_service.get_employee(str(eid)))

    @strawberry.field(name="getEmployeesByDesignationOrDepartment")
    async def get_employees_by_designation_or_department(
        self,
        designation: Optional[str] = None,
        department: Optional[str] = None,
    ) -> EmployeesResponse:
        result = await employee_service.search_employees(designation, department)
        return EmployeesResponse.from_result(result)


@strawberry.type
class Mutation:
    @strawberry.mutation(name="signup")
    async def signup(
        self,
        account: Annotated[SignupInput, strawberry.argument(name="input")],
    ) -> AuthResponse:
        result = await auth_service.signup(user_models.SignupInput(
            username=account.username,
            email=account.email,
            password=account.password,
        ))
        return AuthResponse.from_result(result)

    @strawberry.mutation(name="addEmployee")
    async def add_employee(
        self,
        employee: Annotated[EmployeeInput, strawberry.argument(name="input")],
    ) -> EmployeeResponse:
        result = await employee_service.add_employee(to_employee_model(employee))
        return EmployeeResponse.from_result(result)

    @strawberry.mutation(name="updateEmployeeByEid")
    async def update_employee_by_eid(
        self,
        eid: strawberry.ID,
        changes: Annotated[EmployeeUpdateInput, strawberry.argument(name="input")],
    ) -> EmployeeResponse:
        result = await employee_service.update_employee(str(eid), to_employee_model(changes))
        return EmployeeResponse.from_result(result)

    @strawberry.mutation(name="deleteEmployeeByEid")
    async def delete_employee_by_eid(self, eid: strawberry.ID) -> DeleteResponse:
        return DeleteResponse.from_result(await employee_service.delete_employee(str(eid)))


# Field names are exposed exactly as declared (first_name, not firstName)
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(auto_camel_case=False),
)
