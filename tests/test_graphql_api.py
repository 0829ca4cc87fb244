# tests/test_graphql_api.py
import pytest
from httpx import ASGITransport, AsyncClient

from config import settings
from graphql_schema.schema import schema
from main import app

pytestmark = pytest.mark.asyncio

SIGNUP = """
mutation Signup($input: SignupInput!) {
  signup(input: $input) {
    success message token
    errors { field message }
    user { _id username email created_at }
  }
}
"""

LOGIN = """
query Login($input: LoginInput!) {
  login(input: $input) {
    success message token
    user { _id username }
  }
}
"""

ADD_EMPLOYEE = """
mutation Add($input: EmployeeInput!) {
  addEmployee(input: $input) {
    success message
    errors { field message }
    employee { _id first_name email salary date_of_joining employee_photo }
  }
}
"""

UPDATE_EMPLOYEE = """
mutation Update($eid: ID!, $input: EmployeeUpdateInput!) {
  updateEmployeeByEid(eid: $eid, input: $input) {
    success message
    employee { _id first_name salary department }
  }
}
"""

DELETE_EMPLOYEE = """
mutation Delete($eid: ID!) {
  deleteEmployeeByEid(eid: $eid) { success message }
}
"""

GET_EMPLOYEE = """
query Get($eid: ID!) {
  getEmployeeByEid(eid: $eid) { success message employee { _id first_name } }
}
"""

LIST_EMPLOYEES = """
query {
  getAllEmployees { success message count employees { first_name } }
}
"""

SEARCH_EMPLOYEES = """
query Search($designation: String, $department: String) {
  getEmployeesByDesignationOrDepartment(designation: $designation, department: $department) {
    success message count employees { first_name designation }
  }
}
"""

EMPLOYEE = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@acme.com",
    "gender": "Female",
    "designation": "Engineer",
    "salary": 5000,
    "date_of_joining": "2023-04-01",
    "department": "Research",
}


async def execute(query, **variables):
    result = await schema.execute(query, variable_values=variables, context_value={"current_user": None})
    assert result.errors is None, result.errors
    return result.data


async def test_signup_and_login(mongo_db):
    data = await execute(SIGNUP, input={"username": "ada", "email": "ada@acme.com", "password": "secret123"})
    signup = data["signup"]
    assert signup["success"] is True
    assert signup["errors"] is None
    assert signup["user"]["username"] == "ada"

    data = await execute(LOGIN, input={"usernameOrEmail": "ada@acme.com", "password": "secret123"})
    login = data["login"]
    assert login["success"] is True
    assert login["token"]
    assert login["user"]["_id"] == signup["user"]["_id"]


async def test_signup_validation_errors(mongo_db):
    data = await execute(SIGNUP, input={"username": "", "email": "nope", "password": "1"})
    signup = data["signup"]
    assert signup["success"] is False
    assert signup["message"] == "Validation failed"
    assert [e["field"] for e in signup["errors"]] == ["username", "email", "password"]
    assert signup["token"] is None


async def test_employee_lifecycle(mongo_db):
    added = (await execute(ADD_EMPLOYEE, input=EMPLOYEE))["addEmployee"]
    assert added["success"] is True
    assert added["employee"]["date_of_joining"] == "2023-04-01"
    assert added["employee"]["employee_photo"] is None
    eid = added["employee"]["_id"]

    fetched = (await execute(GET_EMPLOYEE, eid=eid))["getEmployeeByEid"]
    assert fetched["employee"]["first_name"] == "Ada"

    updated = (await execute(UPDATE_EMPLOYEE, eid=eid, input={"salary": 9000}))["updateEmployeeByEid"]
    assert updated["success"] is True
    assert updated["employee"]["salary"] == 9000
    assert updated["employee"]["department"] == "Research"

    listed = (await execute(LIST_EMPLOYEES))["getAllEmployees"]
    assert listed["count"] == 1

    searched = (await execute(SEARCH_EMPLOYEES, designation="ENG"))["getEmployeesByDesignationOrDepartment"]
    assert searched["count"] == 1

    deleted = (await execute(DELETE_EMPLOYEE, eid=eid))["deleteEmployeeByEid"]
    assert deleted == {"success": True, "message": "Employee deleted successfully"}

    again = (await execute(DELETE_EMPLOYEE, eid=eid))["deleteEmployeeByEid"]
    assert again == {"success": False, "message": "Employee not found"}


async def test_add_employee_validation_errors(mongo_db):
    data = await execute(ADD_EMPLOYEE, input={**EMPLOYEE, "salary": 999, "gender": "Unknown"})
    added = data["addEmployee"]
    assert added["success"] is False
    assert [e["field"] for e in added["errors"]] == ["gender", "salary"]
    assert added["employee"] is None


async def test_search_without_filters(mongo_db):
    data = await execute(SEARCH_EMPLOYEES)
    result = data["getEmployeesByDesignationOrDepartment"]
    assert result["success"] is False
    assert result["employees"] == []
    assert result["count"] == 0


@pytest.fixture
async def client(mongo_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "Employee Management API"}


async def test_console_page(client):
    response = await client.get("/")
    assert response.status_code == 307
    assert response.headers["location"] == "/graphql"

    response = await client.get("/graphql", headers={"Accept": "text/html"})
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "GraphiQL" in response.text


async def test_oversized_body_is_rejected(client):
    padding = "x" * settings.MAX_BODY_BYTES
    response = await client.post("/graphql", json={"query": LIST_EMPLOYEES, "variables": {"pad": padding}})
    assert response.status_code == 413


async def test_oversized_streamed_body_is_rejected(client):
    chunk = b"x" * (1024 * 1024)

    async def chunks():
        for _ in range(settings.MAX_BODY_BYTES // len(chunk) + 1):
            yield chunk

    response = await client.post("/graphql", content=chunks(), headers={"Content-Type": "application/json"})
    assert response.status_code == 413


async def test_body_under_the_limit_is_served(client):
    response = await client.post("/graphql", json={"query": LIST_EMPLOYEES})
    assert response.status_code == 200


async def test_graphql_over_http_with_bearer_token(client):
    response = await client.post("/graphql", json={
        "query": SIGNUP,
        "variables": {"input": {"username": "ada", "email": "ada@acme.com", "password": "secret123"}},
    })
    assert response.status_code == 200
    token = response.json()["data"]["signup"]["token"]

    response = await client.post(
        "/graphql",
        json={"query": LIST_EMPLOYEES},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200
    body = response.json()
    assert "errors" not in body
    assert body["data"]["getAllEmployees"] == {
        "success": True,
        "message": "Employees retrieved successfully",
        "count": 0,
        "employees": [],
    }


async def test_graphql_rejects_wrong_input_shape(client):
    response = await client.post("/graphql", json={
        "query": LOGIN,
        "variables": {"input": {"usernameOrEmail": "ada"}},
    })
    body = response.json()
    assert body["errors"]
