# services/employee_service.py
import logging
import re
from datetime import datetime, time
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from models.employee import EmployeeInput, EmployeeView, EMPLOYEE_FIELDS
from models.envelope import OperationResult
from repositories import employee_repository
from services.upload_service import UploadError, is_upload_configured, parse_data_uri, upload_image
from utils.validation import parse_calendar_date, validate

logger = logging.getLogger(__name__)

EMPLOYEE_NOT_FOUND = "Employee not found"


def to_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """Shape validated employee fields for storage."""
    # Fields missing from a stored record stay missing rather than being written as null
    doc = {field: data[field] for field in EMPLOYEE_FIELDS if data.get(field) is not None}
    if "salary" in doc:
        doc["salary"] = float(doc["salary"])
    if "date_of_joining" in doc:
        # BSON has no date type; store the calendar date at midnight
        joined = parse_calendar_date(doc["date_of_joining"])
        doc["date_of_joining"] = datetime.combine(joined, time.min)
    return doc


def employee_list(employees) -> OperationResult:
    views = [EmployeeView.from_document(e) for e in employees]
    return OperationResult.ok(
        "Employees retrieved successfully",
        employees=views,
        count=len(views),
    )


async def resolve_photo(photo_base64: Optional[str], current: Optional[str] = None) -> Optional[str]:
    """
    Upload an embedded photo and return its URL.

    Returns ``current`` unchanged when no usable photo was supplied or uploads
    are not configured. Raises UploadError if the upload itself fails.
    """
    if not photo_base64 or not is_upload_configured():
        return current
    image = parse_data_uri(photo_base64)
    if image is None:
        return current
    return await upload_image(image)


async def get_all_employees() -> OperationResult:
    try:
        employees = await employee_repository.find()
    except PyMongoError as e:
        logger.exception("Failed to fetch employees")
        return OperationResult.fail(str(e) or "Failed to fetch employees", employees=[], count=0)
    return employee_list(employees)


async def get_employee(eid: str) -> OperationResult:
    try:
        employee = await employee_repository.find_by_id(eid)
    except PyMongoError as e:
        logger.exception(f"Failed to fetch employee {eid}")
        return OperationResult.fail(str(e) or "Invalid employee ID")

    if not employee:
        return OperationResult.fail(EMPLOYEE_NOT_FOUND)
    return OperationResult.ok("Employee found", employee=EmployeeView.from_document(employee))


async def search_employees(designation: Optional[str] = None, department: Optional[str] = None) -> OperationResult:
    if not designation and not department:
        return OperationResult.fail(
            "Provide at least designation or department",
            employees=[],
            count=0,
        )

    # Case-insensitive substring match on each supplied field, ANDed together
    filters = {}
    if designation:
        filters["designation"] = {"$regex": re.escape(designation), "$options": "i"}
    if department:
        filters["department"] = {"$regex": re.escape(department), "$options": "i"}

    try:
        employees = await employee_repository.find(filters)
    except PyMongoError as e:
        logger.exception("Failed to search employees")
        return OperationResult.fail(str(e) or "Failed to fetch employees", employees=[], count=0)
    return employee_list(employees)


async def add_employee(employee_data: EmployeeInput) -> OperationResult:
    validation = validate("employeeCreate", employee_data.record())
    if not validation.valid:
        return OperationResult.fail("Validation failed", errors=validation.errors)

    data = validation.data
    try:
        if await employee_repository.find_by_email(data["email"]):
            return OperationResult.fail("Employee with this email already exists")
    except PyMongoError as e:
        logger.exception("Email uniqueness check failed")
        return OperationResult.fail(str(e) or "Failed to add employee")

    try:
        photo_url = await resolve_photo(employee_data.employee_photo_base64)
    except UploadError as e:
        return OperationResult.fail(f"Failed to upload photo: {str(e) or 'Unknown error'}")

    employee_doc = to_document(data)
    employee_doc["employee_photo"] = photo_url

    try:
        employee = await employee_repository.create(employee_doc)
    except DuplicateKeyError:
        return OperationResult.fail("Employee with this email already exists")
    except PyMongoError as e:
        logger.exception("Failed to add employee")
        return OperationResult.fail(str(e) or "Failed to add employee")

    return OperationResult.ok("Employee added successfully", employee=EmployeeView.from_document(employee))


async def update_employee(eid: str, employee_data: EmployeeInput) -> OperationResult:
    try:
        employee = await employee_repository.find_by_id(eid)
    except PyMongoError as e:
        logger.exception(f"Failed to fetch employee {eid}")
        return OperationResult.fail(str(e) or "Failed to update employee")

    if not employee:
        return OperationResult.fail(EMPLOYEE_NOT_FOUND)

    # Supplied fields override stored ones; the merged record is what gets validated
    supplied = employee_data.record()
    merged = {field: employee.get(field) for field in EMPLOYEE_FIELDS}
    merged.update(supplied)

    validation = validate("employeeUpdate", merged)
    if not validation.valid:
        return OperationResult.fail("Validation failed", errors=validation.errors)

    data = validation.data
    try:
        if "email" in supplied and data["email"] != employee["email"]:
            if await employee_repository.find_by_email(data["email"], exclude_id=employee["_id"]):
                return OperationResult.fail("Another employee with this email exists")
    except PyMongoError as e:
        logger.exception("Email uniqueness check failed")
        return OperationResult.fail(str(e) or "Failed to update employee")

    try:
        photo_url = await resolve_photo(employee_data.employee_photo_base64, employee.get("employee_photo"))
    except UploadError as e:
        return OperationResult.fail(f"Failed to upload photo: {str(e) or 'Unknown error'}")

    changes = to_document(data)
    changes["employee_photo"] = photo_url

    try:
        updated = await employee_repository.update(employee["_id"], changes)
    except DuplicateKeyError:
        return OperationResult.fail("Another employee with this email exists")
    except PyMongoError as e:
        logger.exception(f"Failed to update employee {eid}")
        return OperationResult.fail(str(e) or "Failed to update employee")

    if not updated:
        return OperationResult.fail(EMPLOYEE_NOT_FOUND)
    return OperationResult.ok("Employee updated successfully", employee=EmployeeView.from_document(updated))


async def delete_employee(eid: str) -> OperationResult:
    try:
        deleted = await employee_repository.delete(eid)
    except PyMongoError as e:
        logger.exception(f"Failed to delete employee {eid}")
        return OperationResult.fail(str(e) or "Failed to delete employee")

    if not deleted:
        return OperationResult.fail(EMPLOYEE_NOT_FOUND)
    return OperationResult.ok("Employee deleted successfully")
